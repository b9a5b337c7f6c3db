from flask_login import LoginManager
from flask_socketio import SocketIO

from store import Store

store = Store()
login_manager = LoginManager()
socketio = SocketIO()
