from .werkzeug_hasher import WerkzeugCredentialHasher

__all__ = ["WerkzeugCredentialHasher"]
