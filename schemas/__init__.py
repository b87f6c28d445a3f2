from .naming import DEFAULT_NAMING_POLICY, JsonNamingPolicy, WireModel
from .post import Post
from .user import User
from .product import ProductResponse
from .identity import AdminInfoResponse, ExtractedClaims, HeaderReflectionResponse

__all__ = [
    "DEFAULT_NAMING_POLICY",
    "JsonNamingPolicy",
    "WireModel",
    "Post",
    "User",
    "ProductResponse",
    "AdminInfoResponse",
    "ExtractedClaims",
    "HeaderReflectionResponse",
]
