"""Registry of approved suppliers, loaded once from YAML at startup.

Expected file layout::

    data:
      supplier1: https://example.com/supplier1
      supplier2: https://example.com/supplier2
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from errors import SupplierConfigError

logger = logging.getLogger(__name__)


class SupplierRegistry:
    def __init__(self, suppliers: Mapping[str, str]):
        # Sorted by id: this is the order offers reach the reducer in, which
        # decides ties between equally priced offers.
        self._suppliers = dict(sorted(suppliers.items()))

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SupplierRegistry":
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise SupplierConfigError(f"Cannot read suppliers file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise SupplierConfigError(f"Invalid YAML in suppliers file {path}: {e}") from e

        data = raw.get("data") if isinstance(raw, dict) else None
        if not isinstance(data, dict):
            raise SupplierConfigError(f"Suppliers file {path} must contain a 'data' mapping")

        suppliers = {}
        for supplier_id, url in data.items():
            if not isinstance(url, str) or not url.strip():
                raise SupplierConfigError(f"Supplier {supplier_id!r} has no URL in {path}")
            suppliers[str(supplier_id)] = url.strip()

        logger.info("Loaded %d suppliers from %s", len(suppliers), path)
        return cls(suppliers)

    @property
    def ids(self) -> list[str]:
        return list(self._suppliers)

    def resolve(self, requested: str | None = None) -> dict[str, str]:
        """Return the suppliers to query, in registry order.

        ``requested`` is the raw comma separated allow-list from the query
        string; ``None`` or blank selects every supplier. Unknown ids are
        dropped.
        """
        if requested is None or not requested.strip():
            return dict(self._suppliers)

        wanted = {name.strip() for name in requested.split(",") if name.strip()}
        unknown = wanted - self._suppliers.keys()
        if unknown:
            logger.info("Ignoring unknown suppliers: %s", ", ".join(sorted(unknown)))
        return {name: url for name, url in self._suppliers.items() if name in wanted}
