from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Green Fund game server!'})

@main.route('/rooms/<string:room_code>')
def room_state(room_code):
    """
    Returns a read-only snapshot of a room, including the hidden roles.
    """
    coordinator = current_app.extensions['room_coordinator']
    if room_code not in coordinator:
        return jsonify({'error': "Room doesn't exist"}), 404
    return jsonify(coordinator.get_room(room_code).to_dict()), 200
