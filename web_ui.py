"""
Web API for JDK Pulse
Local JSON endpoints for editors and launchers that want the active JDK
"""
from flask import Flask, jsonify, request

from errors import JdkNotFoundError, JdkPulseError
from jdk_manager import JdkManager


def create_app(manager=None):
    """Build the Flask app around a JdkManager"""
    app = Flask(__name__)
    jm = manager or JdkManager('config.json')

    # ============================================================================
    # API ENDPOINTS
    # ============================================================================

    @app.route('/api/jdks')
    def api_jdk_list():
        """List JDK installations"""
        try:
            jdks = jm.list()
            active = jm.get_active()
            return jsonify({
                'success': True,
                'status': jm.status_text(active),
                'jdks': [
                    dict(j.to_dict(), label=jm.label_for(j), is_active=jm.is_active(j, active))
                    for j in jdks
                ]
            })
        except JdkPulseError as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/jdks/active')
    def api_jdk_active():
        """Get the active JDK"""
        try:
            active = jm.get_active()
            return jsonify({
                'success': True,
                'active': active.to_dict() if active else None
            })
        except JdkPulseError as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/jdks/active', methods=['POST'])
    def api_jdk_activate():
        """Set the active JDK by id or home path"""
        data = request.get_json(silent=True) or {}
        target = data.get('id') or data.get('home')
        if not target:
            return jsonify({'success': False, 'error': "Provide 'id' or 'home'"}), 400

        try:
            home = jm.set_active(target)
        except JdkNotFoundError as e:
            return jsonify({'success': False, 'error': str(e)}), 404
        except JdkPulseError as e:
            return jsonify({'success': False, 'error': str(e)}), 500

        return jsonify({
            'success': True,
            'home': home,
            'message': f'Active JDK set to: {home}'
        })

    return app


if __name__ == '__main__':
    create_app().run(host='127.0.0.1', port=5000, debug=False)
