"""
Rampur News CMS Gateway
Application Entry Point

Uses the application factory defined in the rampur_news package.
"""

from rampur_news import create_app

# Create the Flask application using the factory
app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
