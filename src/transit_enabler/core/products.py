"""Product letter to bitmask position tables."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .exceptions import ConfigurationError
from .models import Product


@dataclass(frozen=True)
class ProductTable:
    """Fixed-width product bitmask layout of one network.

    A letter may map to several positions (DB splits long-distance trains into
    two classes) or to none at all when the network knows the mode but has no
    filter bit for it.
    """

    width: int
    positions: Mapping[Product, tuple[int, ...]]

    def __post_init__(self) -> None:
        for product, bits in self.positions.items():
            for bit in bits:
                if not 0 <= bit < self.width:
                    raise ConfigurationError(
                        f"bit {bit} of {product.value} outside mask width {self.width}"
                    )

    def new_mask(self) -> list[str]:
        """Create an empty, call-local mask."""
        return ["0"] * self.width

    def lookup(self, product: Product | str) -> tuple[int, ...]:
        """Get the bit positions of a product letter.

        Raises:
            ConfigurationError: If the letter is unknown to this network
        """
        try:
            key = Product(product)
        except ValueError:
            raise ConfigurationError(f"cannot handle: {product}") from None
        if key not in self.positions:
            raise ConfigurationError(f"cannot handle: {key.value}")
        return self.positions[key]

    def set_product_bits(self, mask: list[str], product: Product | str) -> None:
        """Light the positions of one product in ``mask``.

        The mask is left untouched when the letter is rejected.
        """
        for bit in self.lookup(product):
            mask[bit] = "1"

    def bitmask(self, products: Iterable[Product | str]) -> str:
        mask = self.new_mask()
        for product in products:
            self.set_product_bits(mask, product)
        return "".join(mask)

    def all_products_bitmask(self) -> str:
        return self.bitmask(self.positions)

    def all_products_int(self) -> int:
        """All products as integer, position 0 being the lowest bit."""
        return int(self.all_products_bitmask()[::-1], 2)
