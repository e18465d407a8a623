"""
Learn & Grow portal - Main Application Entry Point
"""
import os
from portal import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False),
            host='0.0.0.0',
            port=int(os.getenv('PORT', 3000)))
