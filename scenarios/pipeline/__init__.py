from .cartesian import CartesianProduct, product, product_size
from .merger import MergeOptions, merge, merge_all, merge_combinations

__all__ = [
    "CartesianProduct", "product", "product_size",
    "MergeOptions", "merge", "merge_all", "merge_combinations",
]
