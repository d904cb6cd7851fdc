from .document_classifier import DocumentClassifier, classify

__all__ = ["DocumentClassifier", "classify"]
