"""Dataset loading and the results table."""

from dagscope.dataset.loader import (
    Dataset,
    DatasetError,
    dataset_from_document,
    list_datasets,
    load_dataset,
)

__all__ = [
    "Dataset",
    "DatasetError",
    "dataset_from_document",
    "list_datasets",
    "load_dataset",
]
