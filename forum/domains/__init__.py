# forum/domains/__init__.py
