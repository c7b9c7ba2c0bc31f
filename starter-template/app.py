"""
Pruto Starter Template
======================

A ready-to-run Flask application serving the product catalog.

Run with:
    python app.py

Visit:
    http://localhost:5000/products  - Product API
    http://localhost:5000/cart      - Cart (send X-Firebase-UID)
    http://localhost:5000/health    - Health check
"""

from flask import Flask
from pruto import Pruto

from config import Config


def create_app(mongo_client=None):
    """Create the Flask app; tests pass an in-memory mongo_client"""
    app = Flask(__name__)

    app.config['SECRET_KEY'] = Config.SECRET_KEY
    app.config['MONGO_URI'] = Config.MONGO_URI
    app.config['PRODUCTS_COLLECTION'] = Config.PRODUCTS_COLLECTION
    app.config['CORS_ORIGINS'] = Config.CORS_ORIGINS
    app.config['FIREBASE_API_KEY'] = Config.FIREBASE_API_KEY
    app.config['FIREBASE_PROJECT_ID'] = Config.FIREBASE_PROJECT_ID
    app.config['FIREBASE_STORAGE_BUCKET'] = Config.FIREBASE_STORAGE_BUCKET

    # Initialize Pruto - registers products, users, cart, orders, admin and ops
    Pruto(app, mongo_client=mongo_client)

    return app


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    app = create_app()

    print("\n" + "=" * 60)
    print("Pruto Starter Template")
    print("=" * 60)
    print(f"Products API:    http://localhost:{Config.PORT}/products")
    print(f"Cart API:        http://localhost:{Config.PORT}/cart")
    print(f"Health:          http://localhost:{Config.PORT}/health")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.PORT, debug=True)
