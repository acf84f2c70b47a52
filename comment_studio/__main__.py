"""python -m comment_studio"""

from comment_studio.cli.app import app

if __name__ == "__main__":
    app()
