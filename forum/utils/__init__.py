# forum/utils/__init__.py
