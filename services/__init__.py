"""Service layer.

Services are created once by :func:`init_services` and fetched through the
``get_*_service`` helpers so routes never build their own instances.
"""

from typing import Any, Dict, Optional

from .admin_service import AdminService
from .catalog_service import CatalogService
from .gk_service import GKService
from .question_service import QuestionService
from .user_service import UserService


class ServiceFactory:
    """Holds one instance of every service."""

    def __init__(self):
        self.admin_service = AdminService()
        self.catalog_service = CatalogService()
        self.question_service = QuestionService()
        self.gk_service = GKService()
        self.user_service = UserService()

    def get_all_services(self) -> Dict[str, Any]:
        return {
            "admin_service": self.admin_service,
            "catalog_service": self.catalog_service,
            "question_service": self.question_service,
            "gk_service": self.gk_service,
            "user_service": self.user_service,
        }


_factory: Optional[ServiceFactory] = None


def init_services() -> ServiceFactory:
    global _factory
    _factory = ServiceFactory()
    return _factory


def get_service_factory() -> ServiceFactory:
    if _factory is None:
        return init_services()
    return _factory


def get_admin_service() -> AdminService:
    return get_service_factory().admin_service


def get_catalog_service() -> CatalogService:
    return get_service_factory().catalog_service


def get_question_service() -> QuestionService:
    return get_service_factory().question_service


def get_gk_service() -> GKService:
    return get_service_factory().gk_service


def get_user_service() -> UserService:
    return get_service_factory().user_service
