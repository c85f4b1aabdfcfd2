import os
import logging
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from shared_globals import get_db
from trips.routes.share_link_routes import create_share_link_bp
from trips.utils.errors import register_error_handlers

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def create_app(db_instance, share_link_rule='/generateShareLink'):
    app = Flask(__name__)

    share_link_bp = create_share_link_bp(db_instance, rule=share_link_rule)
    app.register_blueprint(share_link_bp)

    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == '__main__':
    app = create_app(get_db())
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
