"""Local development entrypoint.

Runs the Flask dev server with the threaded worker model so concurrent
sales can be exercised locally.
"""

from lottery_sales import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=False, threaded=True)
