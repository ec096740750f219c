"""
Database Router for GPS Tracker
Routes read operations to the analytics database (when configured) and writes to default
"""
from django.conf import settings

ANALYTICS_DB = 'analytics'


class TrackerRouter:
    """
    A router to control database operations for tracker models
    - Write operations (INSERT/UPDATE/DELETE) use 'default'
    - Read operations (SELECT) use 'analytics' (read-only user) if that alias exists
    """
    app_label = 'tracker'

    def db_for_read(self, model, **hints):
        """
        Route read operations to analytics database
        """
        if model._meta.app_label == self.app_label and ANALYTICS_DB in settings.DATABASES:
            return ANALYTICS_DB
        return None

    def db_for_write(self, model, **hints):
        """
        Route write operations to default database
        """
        if model._meta.app_label == self.app_label:
            return 'default'
        return None

    def allow_relation(self, obj1, obj2, **hints):
        """
        Allow relations if either model is in the tracker app
        """
        if obj1._meta.app_label == self.app_label or obj2._meta.app_label == self.app_label:
            return True
        return None

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        """
        Run migrations on default database only
        """
        if app_label == self.app_label:
            return db == 'default'
        return None
