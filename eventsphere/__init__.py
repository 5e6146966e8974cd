"""Django project package for the EventSphere notification sync service."""
