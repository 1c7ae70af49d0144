from .contact import Contact
from .company import Company

__all__ = ['Contact', 'Company']
