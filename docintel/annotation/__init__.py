from docintel.annotation.annotator import Annotator
from docintel.annotation.factory import AnnotatorFactory
from docintel.annotation.models import Annotation

__all__ = ["Annotation", "Annotator", "AnnotatorFactory"]
