"""Dynamic Color demo (Flask).

Three RGB sliders drive a swatch whose text, icon and overlay colours are
derived from the swatch's luminance, together with plus-lighter / plus-darker
blend modes chosen to keep them legible.

Usage
-----
$ pip install -e .
$ python main.py                # starts on http://127.0.0.1:5000

Space bar picks a random colour. The server keeps one shared state and
`Store.dispatch` serializes updates, so `flask --app main run` (threaded by
default) works as well.

Settings come from ``DYNAMIC_COLOR_*`` environment variables, e.g.
``DYNAMIC_COLOR_DISPLAY_COLOR_SPACE='"srgb"'``.
"""

from dynamic_color.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=False, threaded=False)
