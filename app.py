import logging
import os

from flask import Flask, current_app, jsonify, send_from_directory

from config import Config
from errors import AppError
from extensions import login_manager, socketio, store


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)
    logging.basicConfig(level=logging.DEBUG if app.debug else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    # socket handlers have to exist before init_app copies them onto the server
    from routes import sockets  # noqa: F401

    store.init_app(app)
    login_manager.init_app(app)
    socketio.init_app(app, cors_allowed_origins='*')

    from routes.auth import auth_bp
    from routes.profile import profile_bp
    from routes.search import search_bp
    from routes.feed import feed_bp
    from routes.friends import friends_bp
    from routes.messages import messages_bp
    from routes.notifications import notifications_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(feed_bp)
    app.register_blueprint(friends_bp)
    app.register_blueprint(messages_bp)
    app.register_blueprint(notifications_bp)

    @app.errorhandler(AppError)
    def handle_app_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        # HTTPExceptions (404 for unknown routes, 413, ...) keep their own status
        code = getattr(e, 'code', None)
        if isinstance(code, int):
            return jsonify({'error': getattr(e, 'description', str(e))}), code
        current_app.logger.exception('unhandled error: %s', e)
        return jsonify({'error': 'Internal server error'}), 500

    @app.route('/uploads/<path:filename>')
    def uploads(filename):
        return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    return app


if __name__ == '__main__':
    app = create_app()
    socketio.run(app, host='0.0.0.0', port=int(os.environ.get('PORT', 3001)), debug=True)
