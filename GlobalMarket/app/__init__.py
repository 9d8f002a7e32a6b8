from flask import Flask
from GlobalMarket.app.config import Config


def create_app(config_object=Config):
    """
    Application Factory Pattern to initialize the Flask App
    """
    # 1. Initialize the Flask application
    app = Flask(__name__)

    # 2. Load configuration from config.py
    app.config.from_object(config_object)

    # 3. Import Blueprints
    # Imports are done here to avoid circular import errors
    from GlobalMarket.app.routes.validation_routes import validation_bp

    # 4. Register Blueprints
    app.register_blueprint(validation_bp)

    return app
