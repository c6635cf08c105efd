"""
Core Database Components

- models: abstract base model classes shared by every LabourHub app
"""

from core.db.models import BaseModel

__all__ = ['BaseModel']
