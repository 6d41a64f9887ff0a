from app.schemas.auth import CredentialsRequest, DecisionResponse

__all__ = [
    "CredentialsRequest",
    "DecisionResponse",
]
