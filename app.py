import os

from bookshelf import create_app

app = create_app()


if __name__ == "__main__":
    app.run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=app.config["PORT"],
        debug=os.environ.get("FLASK_DEBUG", "0") == "1",
    )
