# olastretch/cli/__init__.py
