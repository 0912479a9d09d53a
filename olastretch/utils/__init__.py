# olastretch/utils/__init__.py
