"""
Service layer.

``RosterService`` holds the roster state and its consistency rules;
``photo_store`` provides the storage used for rower photos.  API
handlers only translate HTTP requests into service calls.
"""
