"""
License Requirements Service Django project.
"""
