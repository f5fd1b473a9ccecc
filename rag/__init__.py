"""RAG package initialization"""

from .dataset_search import CuratedDataset, DatasetMatch

__all__ = ['CuratedDataset', 'DatasetMatch']
