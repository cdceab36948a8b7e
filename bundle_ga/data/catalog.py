"""
Product catalog

This module contains the product universe the genetic algorithm draws
bundles from, and the code index that fixes the meaning of every gene.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple


@dataclass(frozen=True)
class ProductRecord:
    """Family and price (in cents) of one product"""
    family: int
    price: int


class Catalog(Mapping):
    """
    Read-only mapping from product identifier to ProductRecord

    The code index is the sorted tuple of identifiers; gene i of every
    chromosome refers to code_index[i].
    """

    def __init__(self, products: Mapping[int, ProductRecord]):
        """
        Initialize catalog

        Args:
            products: Mapping from product identifier to its record
        """
        records: Dict[int, ProductRecord] = {}
        for product_id, record in products.items():
            if not isinstance(record, ProductRecord):
                record = ProductRecord(*record)
            records[int(product_id)] = record

        self._products = MappingProxyType(records)
        self._code_index: Tuple[int, ...] = tuple(sorted(records))

    @property
    def code_index(self) -> Tuple[int, ...]:
        """Identifiers in gene order"""
        return self._code_index

    @property
    def families(self) -> Tuple[int, ...]:
        """Distinct families present in the catalog, ascending"""
        return tuple(sorted({record.family for record in self._products.values()}))

    def record_at(self, position: int) -> ProductRecord:
        """Record of the product referred to by a gene position"""
        return self._products[self._code_index[position]]

    def __getitem__(self, product_id: int) -> ProductRecord:
        return self._products[product_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._code_index)

    def __len__(self) -> int:
        return len(self._code_index)

    def __repr__(self) -> str:
        return f"Catalog(products={len(self)}, families={len(self.families)})"
