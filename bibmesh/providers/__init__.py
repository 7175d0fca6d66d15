from .base import Diagnostic, Provider, TransformResult
from .gvk import GVK
from .springer import Springer
from .zbmath import ZbMath

__all__ = ["Provider", "Diagnostic", "TransformResult", "GVK", "Springer", "ZbMath"]
