"""
Flask REST API for SciCalc
Exposes the evaluator and per-session calculators as JSON endpoints
"""
import uuid

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
import evaluator
from calculator import Calculator

app = Flask(__name__)
CORS(app)  # Enable CORS for all routes

# One independent calculator per session id
calculators = {}

ACTIONS = {
    "token": lambda calc, value: calc.add_token(value),
    "function": lambda calc, value: calc.add_function(value),
    "dot": lambda calc, value: calc.add_decimal_point(),
    "sign": lambda calc, value: calc.toggle_sign(),
    "square": lambda calc, value: calc.square(),
    "backspace": lambda calc, value: calc.backspace(),
    "clear": lambda calc, value: calc.clear(),
    "equals": lambda calc, value: calc.calculate(),
    "angle": lambda calc, value: calc.toggle_angle_mode(),
}

# Actions that need a string 'value' in the request body
VALUE_ACTIONS = ("token", "function")
FUNCTION_NAMES = ("sin", "cos", "tan", "ln", "log", "√")


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def _session_response(session_id, calc, status=200):
    data = calc.to_dict()
    data['id'] = session_id
    return jsonify({'success': True, 'data': data}), status


def _get_calculator(session_id):
    return calculators.get(session_id)


def _json_body():
    """Request body as a dict; None when it is JSON but not an object"""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        return None
    return body


@app.route('/api')
def api_info():
    """API information page"""
    return """
    <html>
    <head><title>SciCalc API</title></head>
    <body style="font-family: Arial; padding: 40px; background: #1a1a2e; color: white;">
        <h1>SciCalc API Server</h1>
        <h2>Available Endpoints:</h2>
        <ul>
            <li>POST /api/evaluate - Evaluate an expression</li>
            <li>POST /api/calculators - Start a calculator session</li>
            <li>GET /api/calculators/&lt;id&gt; - Session display and mode</li>
            <li>POST /api/calculators/&lt;id&gt;/actions - Press a calculator button</li>
            <li>POST /api/calculators/&lt;id&gt;/keys - Press a keyboard key</li>
            <li>GET /api/calculators/&lt;id&gt;/history - Calculation history</li>
        </ul>
    </body>
    </html>
    """


@app.route('/api/evaluate', methods=['POST'])
def evaluate_expression():
    """Evaluate an expression without touching any session"""
    try:
        body = _json_body()
        if body is None:
            return _error("Request body must be a JSON object", 400)
        expression = body.get('expression')
        if not isinstance(expression, str):
            return _error("'expression' must be a string", 400)

        angle_mode = body.get('angle_mode', config.DEFAULT_ANGLE_MODE)
        if angle_mode not in [mode.value for mode in evaluator.AngleMode]:
            return _error("'angle_mode' must be 'deg' or 'rad'", 400)

        outcome = evaluator.evaluate(expression, angle_mode)
        return jsonify({'success': True, 'data': outcome.to_dict()})
    except Exception as e:
        return _error(str(e), 500)


@app.route('/api/calculators', methods=['POST'])
def create_calculator():
    """Start a new calculator session"""
    try:
        body = _json_body()
        if body is None:
            return _error("Request body must be a JSON object", 400)
        angle_mode = body.get('angle_mode', config.DEFAULT_ANGLE_MODE)
        if angle_mode not in [mode.value for mode in evaluator.AngleMode]:
            return _error("'angle_mode' must be 'deg' or 'rad'", 400)

        while len(calculators) >= config.MAX_SESSIONS:
            # dicts keep insertion order, so this is the oldest session
            del calculators[next(iter(calculators))]

        session_id = uuid.uuid4().hex
        calculators[session_id] = Calculator(angle_mode)
        return _session_response(session_id, calculators[session_id], 201)
    except Exception as e:
        return _error(str(e), 500)


@app.route('/api/calculators/<session_id>', methods=['GET'])
def get_calculator(session_id):
    calc = _get_calculator(session_id)
    if calc is None:
        return _error("Unknown calculator", 404)
    return _session_response(session_id, calc)


@app.route('/api/calculators/<session_id>', methods=['DELETE'])
def delete_calculator(session_id):
    if calculators.pop(session_id, None) is None:
        return _error("Unknown calculator", 404)
    return jsonify({'success': True})


@app.route('/api/calculators/<session_id>/actions', methods=['POST'])
def press_button(session_id):
    """Apply one calculator button press"""
    try:
        calc = _get_calculator(session_id)
        if calc is None:
            return _error("Unknown calculator", 404)

        body = _json_body()
        if body is None:
            return _error("Request body must be a JSON object", 400)
        action = body.get('action')
        value = body.get('value')
        if action not in ACTIONS:
            return _error(f"'action' must be one of: {', '.join(ACTIONS)}", 400)
        if action in VALUE_ACTIONS and (not isinstance(value, str) or not value):
            return _error(f"'{action}' needs a non-empty string 'value'", 400)
        if action == "function" and value not in FUNCTION_NAMES:
            return _error(f"'value' must be one of: {', '.join(FUNCTION_NAMES)}", 400)

        ACTIONS[action](calc, value)
        return _session_response(session_id, calc)
    except ValueError as e:
        return _error(str(e), 400)
    except Exception as e:
        return _error(str(e), 500)


@app.route('/api/calculators/<session_id>/keys', methods=['POST'])
def press_key(session_id):
    """Apply one keyboard key press"""
    try:
        calc = _get_calculator(session_id)
        if calc is None:
            return _error("Unknown calculator", 404)

        body = _json_body()
        if body is None:
            return _error("Request body must be a JSON object", 400)
        key = body.get('key')
        if not isinstance(key, str):
            return _error("'key' must be a string", 400)

        handled = calc.press_key(key)
        data = calc.to_dict()
        data['id'] = session_id
        data['handled'] = handled
        return jsonify({'success': True, 'data': data})
    except Exception as e:
        return _error(str(e), 500)


@app.route('/api/calculators/<session_id>/history', methods=['GET'])
def get_history(session_id):
    """Get calculation history, most recent first"""
    calc = _get_calculator(session_id)
    if calc is None:
        return _error("Unknown calculator", 404)

    formatted = [entry.to_dict() for entry in calc.history.get_calculation_history()]
    return jsonify({
        'success': True,
        'data': formatted,
        'count': len(formatted)
    })


@app.route('/api/calculators/<session_id>/history', methods=['DELETE'])
def clear_history(session_id):
    calc = _get_calculator(session_id)
    if calc is None:
        return _error("Unknown calculator", 404)
    calc.clear_history()
    return jsonify({'success': True, 'count': 0})


@app.route('/api/calculators/<session_id>/history/<int:index>', methods=['POST'])
def select_history(session_id, index):
    """Put a history result back on the display"""
    calc = _get_calculator(session_id)
    if calc is None:
        return _error("Unknown calculator", 404)
    if not calc.select_history(index):
        return _error("History entry not found", 404)
    return _session_response(session_id, calc)


if __name__ == '__main__':
    print("\n" + "="*60)
    print("SciCalc API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}")
    print("="*60 + "\n")

    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
