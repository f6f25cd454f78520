"""Django project configuration: settings package, URLs and WSGI/ASGI entry points."""
