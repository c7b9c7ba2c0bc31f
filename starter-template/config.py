import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Document store
    MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017/pruto')
    PRODUCTS_COLLECTION = 'products'

    # Front-end origins allowed to call the API, empty allows none
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*' if not IS_PRODUCTION else '')

    # Auth / storage platform (values come from the environment only)
    FIREBASE_API_KEY = os.getenv('FIREBASE_API_KEY', '')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID', '')
    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET', '')

    PORT = int(os.getenv('PORT', '5000'))
