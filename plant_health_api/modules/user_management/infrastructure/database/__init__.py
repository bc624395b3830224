from .models import UserModel
from .user_repository_impl import UserRepositoryImpl

__all__ = ["UserModel", "UserRepositoryImpl"]
