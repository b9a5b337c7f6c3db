import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me')
    DATA_DIR = os.environ.get('DATA_DIR', os.path.join(os.getcwd(), 'data'))
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    # seconds; None means tokens never expire
    TOKEN_MAX_AGE = int(os.environ['TOKEN_MAX_AGE']) if os.environ.get('TOKEN_MAX_AGE') else None
    FEED_PAGE_SIZE = int(os.environ.get('FEED_PAGE_SIZE', 20))
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024
    ALLOWED_MEDIA = {'png', 'jpg', 'jpeg', 'gif', 'mp4', 'webm'}
    DEFAULT_AVATAR = "https://i.pravatar.cc/150?u={email}"
