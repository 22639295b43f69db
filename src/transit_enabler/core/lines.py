"""Line label and product type normalization."""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .models import Line, Product

logger = logging.getLogger(__name__)

# Long-distance trains of the Russian railways, e.g. "012AJ"
LINE_RUSSIA = (
    r"\d{3}(?:AJ|BJ|CJ|DJ|EJ|FJ|GJ|IJ|KJ|LJ|NJ|MJ|OJ|RJ|SJ|TJ|UJ|VJ|ZJ|CH|KH|ZO)"
)

LINE_GRAMMAR = re.compile(r"([A-Za-zÄÖÜäöüß]+)[\s-]*(.*)")

DEFAULT_TYPES: Mapping[str, Product] = {
    # long distance
    "ICE": Product.HIGH_SPEED_TRAIN,
    "IC": Product.HIGH_SPEED_TRAIN,
    "EC": Product.HIGH_SPEED_TRAIN,
    "ECE": Product.HIGH_SPEED_TRAIN,
    "EN": Product.HIGH_SPEED_TRAIN,
    "CNL": Product.HIGH_SPEED_TRAIN,
    "D": Product.HIGH_SPEED_TRAIN,
    "THA": Product.HIGH_SPEED_TRAIN,
    "TGV": Product.HIGH_SPEED_TRAIN,
    "RJ": Product.HIGH_SPEED_TRAIN,
    "OEC": Product.HIGH_SPEED_TRAIN,
    "OIC": Product.HIGH_SPEED_TRAIN,
    "EIC": Product.HIGH_SPEED_TRAIN,
    "ICN": Product.HIGH_SPEED_TRAIN,
    "TLK": Product.HIGH_SPEED_TRAIN,
    "X": Product.HIGH_SPEED_TRAIN,
    "NZ": Product.HIGH_SPEED_TRAIN,
    "IN": Product.HIGH_SPEED_TRAIN,
    # regional
    "R": Product.REGIONAL_TRAIN,
    "RE": Product.REGIONAL_TRAIN,
    "RB": Product.REGIONAL_TRAIN,
    "IR": Product.REGIONAL_TRAIN,
    "IRE": Product.REGIONAL_TRAIN,
    "REX": Product.REGIONAL_TRAIN,
    "DPN": Product.REGIONAL_TRAIN,
    "ERB": Product.REGIONAL_TRAIN,
    "ALX": Product.REGIONAL_TRAIN,
    "VBG": Product.REGIONAL_TRAIN,
    "HZL": Product.REGIONAL_TRAIN,
    "MRB": Product.REGIONAL_TRAIN,
    "NWB": Product.REGIONAL_TRAIN,
    "NOB": Product.REGIONAL_TRAIN,
    "BOB": Product.REGIONAL_TRAIN,
    "HLB": Product.REGIONAL_TRAIN,
    "VIA": Product.REGIONAL_TRAIN,
    "ZUG": Product.REGIONAL_TRAIN,
    # suburban
    "S": Product.SUBURBAN_TRAIN,
    "SB": Product.SUBURBAN_TRAIN,
    # underground
    "U": Product.SUBWAY,
    # tram
    "STR": Product.TRAM,
    "T": Product.TRAM,
    "TRAM": Product.TRAM,
    "STB": Product.TRAM,
    # bus
    "BUS": Product.BUS,
    "B": Product.BUS,
    "NB": Product.BUS,
    "SEV": Product.BUS,
    "BSV": Product.BUS,
    # ferry
    "SCH": Product.FERRY,
    "F": Product.FERRY,
    "FÄHRE": Product.FERRY,
    "KAT": Product.FERRY,
    # cable car
    "SEILB": Product.CABLECAR,
    "ZAHNR": Product.CABLECAR,
    # on demand
    "AST": Product.ON_DEMAND,
    "ALT": Product.ON_DEMAND,
    "RUF": Product.ON_DEMAND,
}


@dataclass(frozen=True)
class TypeRule:
    """Maps a raw product code, or every code with a given prefix."""

    code: str
    product: Product
    prefix: bool = False

    def matches(self, uc_type: str) -> bool:
        if self.prefix:
            return uc_type.startswith(self.code)
        return uc_type == self.code


@dataclass(frozen=True)
class LineRule:
    """Maps a whole raw line label, literally or by regular expression."""

    match: str
    product: Product
    regex: bool = False

    def matches(self, line: str) -> bool:
        if self.regex:
            return re.fullmatch(self.match, line) is not None
        return line == self.match


DEFAULT_LINE_RULES: tuple[LineRule, ...] = (
    LineRule("Bus", Product.BUS),
    LineRule(LINE_RUSSIA, Product.REGIONAL_TRAIN, regex=True),
)


def _compact(label: str) -> str:
    return re.sub(r"\s+", "", label)


@dataclass(frozen=True)
class LineNormalizer:
    """Classifies raw line labels, network rules first, shared defaults last."""

    type_overrides: Sequence[TypeRule] = ()
    type_fallbacks: Sequence[TypeRule] = ()
    line_rules: Sequence[LineRule] = ()

    def normalize_type(self, raw_type: str) -> Product | None:
        """Map a raw product code like 'RE' or 'Bus' to a product.

        Returns None when the code is unknown; callers treat such lines as
        wildcard lines.
        """
        uc_type = raw_type.strip().upper()
        if not uc_type:
            return None

        for rule in self.type_overrides:
            if rule.matches(uc_type):
                return rule.product

        product = DEFAULT_TYPES.get(uc_type)
        if product is not None:
            return product

        for rule in self.type_fallbacks:
            if rule.matches(uc_type):
                return rule.product

        return None

    def parse_line_without_type(self, raw_line: str) -> Line:
        """Classify a bare line label such as 'RE 4200', 'S8' or 'Schw-B'."""
        line = raw_line.strip()

        for rule in (*self.line_rules, *DEFAULT_LINE_RULES):
            if rule.matches(line):
                return Line(product=rule.product, label=line)

        match = LINE_GRAMMAR.fullmatch(line)
        if match:
            raw_type, number = match.groups()
            product = self.normalize_type(raw_type)
            if product is not None:
                return Line(product=product, label=raw_type + _compact(number))

        logger.debug(f"Cannot classify line {line!r}, using wildcard")
        return Line(product=Product.UNKNOWN, label=line)

    def parse_line_and_type(self, raw: str) -> Line:
        """Classify a board label of the form 'S 8#S' (label, then type)."""
        label, _, raw_type = raw.partition("#")
        if raw_type:
            product = self.normalize_type(raw_type)
            if product is not None:
                return Line(product=product, label=_compact(label))
        return self.parse_line_without_type(label)
