from .disease_info_parser import DiseaseInfoParser, placeholder_info
from .disease_info_service import DiseaseInfoService, get_disease_info_service

__all__ = ["DiseaseInfoParser", "DiseaseInfoService", "get_disease_info_service", "placeholder_info"]
