"""
Catalog loader for the product universe

This module builds catalogs either synthetically or from CSV files with one
product per row: product_id,family,price (price in cents, no header).
"""

import random
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .catalog import Catalog, ProductRecord


class CatalogLoader:
    """Generates, loads and saves product catalogs"""

    COLUMNS = ['product_id', 'family', 'price']
    MIN_PRODUCT_ID = 10000
    MAX_PRODUCT_ID = 99999

    def generate(self, count: int, max_price: int, num_families: int,
                 rng: Optional[random.Random] = None) -> Catalog:
        """
        Generate a random catalog

        Args:
            count: Number of products
            max_price: Exclusive upper bound of prices, in cents
            num_families: Families are drawn from [0, num_families)
            rng: Random source (module-level random if None)

        Returns:
            Catalog with `count` distinct product identifiers
        """
        rng = rng or random
        id_range = range(self.MIN_PRODUCT_ID, self.MAX_PRODUCT_ID)
        if not 0 < count <= len(id_range):
            raise ValueError(f"Product count must be between 1 and {len(id_range)}")
        if max_price <= 0:
            raise ValueError("Max price must be positive")
        if num_families <= 0:
            raise ValueError("Number of families must be positive")

        products = {}
        for product_id in rng.sample(id_range, count):
            products[product_id] = ProductRecord(
                family=rng.randrange(num_families),
                price=rng.randrange(max_price)
            )
        return Catalog(products)

    def load_csv(self, filepath: Union[str, Path]) -> Catalog:
        """
        Load a catalog from a CSV file

        Args:
            filepath: Path to the CSV file

        Returns:
            Catalog built from every row of the file

        Raises:
            ValueError: If the file is empty or any record is malformed
        """
        try:
            data = pd.read_csv(filepath, header=None, dtype=str,
                               keep_default_na=False, skipinitialspace=True)
        except pd.errors.EmptyDataError:
            raise ValueError(f"Catalog file {filepath} is empty") from None
        except pd.errors.ParserError as e:
            raise ValueError(f"Catalog file {filepath} is malformed: {e}") from None

        if data.shape[1] != len(self.COLUMNS):
            raise ValueError(f"Catalog file {filepath} must have {len(self.COLUMNS)} columns "
                             f"({', '.join(self.COLUMNS)}), found {data.shape[1]}")
        data.columns = self.COLUMNS

        numeric = data.apply(lambda column: pd.to_numeric(column.astype(str).str.strip(), errors='coerce'))
        invalid = numeric.isna() | (numeric % 1 != 0)
        bad_rows = invalid.any(axis=1)
        if bad_rows.any():
            row = bad_rows.idxmax()
            column = invalid.columns[invalid.loc[row].to_numpy()][0]
            raise ValueError(f"Catalog file {filepath}, row {row + 1}: "
                             f"'{column}' is not an integer: {data.loc[row, column]!r}")

        numeric = numeric.astype(int)
        duplicated = numeric['product_id'].duplicated()
        if duplicated.any():
            row = duplicated.idxmax()
            raise ValueError(f"Catalog file {filepath}, row {row + 1}: "
                             f"duplicate product_id {numeric.loc[row, 'product_id']}")
        if (numeric['price'] < 0).any():
            row = (numeric['price'] < 0).idxmax()
            raise ValueError(f"Catalog file {filepath}, row {row + 1}: price must be non-negative")

        return Catalog({
            int(row.product_id): ProductRecord(family=int(row.family), price=int(row.price))
            for row in numeric.itertuples(index=False)
        })

    def save_csv(self, catalog: Catalog, filepath: Union[str, Path]) -> Path:
        """
        Save a catalog in the format read by load_csv

        Args:
            catalog: Catalog to save
            filepath: Destination path

        Returns:
            Path to saved file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe(catalog).to_csv(filepath, header=False, index=False)
        return filepath

    def to_dataframe(self, catalog: Catalog) -> pd.DataFrame:
        """Catalog as a DataFrame in gene order"""
        return pd.DataFrame(
            {
                'product_id': list(catalog.code_index),
                'family': [catalog[pid].family for pid in catalog.code_index],
                'price': [catalog[pid].price for pid in catalog.code_index],
            }
        )
