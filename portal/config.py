"""
Configuration settings for the Learn & Grow portal
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # LMS backend
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:5000')
    API_TIMEOUT = float(os.getenv('API_TIMEOUT', 10))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    WTF_CSRF_ENABLED = True
    SESSION_COOKIE_HTTPONLY = True


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    WTF_CSRF_ENABLED = False
    API_BASE_URL = 'http://lms.test'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
