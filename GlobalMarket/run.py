from GlobalMarket.app import create_app

# Initialize the Flask application using the factory pattern
app = create_app()

if __name__ == "__main__":
    app.run(port=5001, debug=True)
