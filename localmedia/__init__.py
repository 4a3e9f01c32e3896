# localmedia/__init__.py
