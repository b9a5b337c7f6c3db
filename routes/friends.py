from flask import Blueprint, jsonify
from flask_login import current_user, login_required

import graph
from routes import request_data, text_field

friends_bp = Blueprint('friends', __name__, url_prefix='/api/friends')


@friends_bp.get('')
@login_required
def list_friends():
    return jsonify([u.public() for u in graph.list_friends(current_user.id)])


@friends_bp.post('/request')
@login_required
def send_request():
    edge = graph.request_friend(current_user.id, text_field(request_data(), 'friend_id'))
    return jsonify(edge.to_dict())


@friends_bp.get('/requests')
@login_required
def requests():
    received = []
    for edge, sender in graph.pending_requests(current_user.id):
        item = edge.to_dict()
        item['user'] = sender.public() if sender else None
        received.append(item)
    return jsonify(received)


@friends_bp.post('/<edge_id>/respond')
@login_required
def respond(edge_id):
    edge = graph.respond_friend(edge_id, current_user.id, text_field(request_data(), 'action'))
    return jsonify(edge.to_dict())
