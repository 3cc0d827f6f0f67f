"""Users module - registered identities and the credential store.

Registration and login routes live in app.core.auth; this module exposes
no router of its own.
"""
