# wsgi.py
from fletoads import create_app

application = create_app()
