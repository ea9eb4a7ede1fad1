from .pyjwt_token_codec import JWTTokenCodec

__all__ = ["JWTTokenCodec"]
