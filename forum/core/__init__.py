# forum/core/__init__.py
