from .token_provider import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, JWTTokenProvider

__all__ = ["ACCESS_TOKEN_TYPE", "REFRESH_TOKEN_TYPE", "JWTTokenProvider"]
