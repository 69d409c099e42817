"""Reconstruct the province > regency > district tree from the primary row stream."""
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence
from wilayah.core.config import (
    DISTRICT_CODE_LENGTH,
    DISTRICT_LEVEL,
    PROVINCE_LEVEL,
    REGENCY_CODE_LENGTH,
    REGENCY_LEVEL,
    split_province_for,
)
from wilayah.core.models import (
    BuilderContext,
    ClassifiedRow,
    DistrictRow,
    Place,
    PlaceType,
    ProvinceRow,
    RegencyRow,
    SkipRow,
)
from wilayah.core.normalization import normalize_name, repair_spaced_words, slugify
from wilayah.core.place_index import PlaceTree
from wilayah.utils.logging import log_structured


# Most specific prefix first: (pattern, type, display prefix, short label prefix)
REGENCY_PREFIXES = [
    (re.compile(r"^Kabupaten Administrasi (.+)$"), PlaceType.KABUPATEN_ADMINISTRASI,
     "Kabupaten Administrasi", "Kab. Adm. "),
    (re.compile(r"^Kota Administrasi (.+)$"), PlaceType.KOTA_ADMINISTRASI,
     "Kota Administrasi", "Kota Adm. "),
    (re.compile(r"^Kota (.+)$"), PlaceType.KOTA, "Kota", "Kota "),
    (re.compile(r"^Kabupaten (.+)$"), PlaceType.KABUPATEN, "Kabupaten", "Kab. "),
]

PROVINCE_ALT_NAMES = [
    (re.compile(r"Yogyakarta$"), ["Daerah Istimewa Yogyakarta", "Daista Yogyakarta", "DIY"]),
    (re.compile(r"Jakarta$"), ["Jakarta", "DKI"]),
]

_PARENTHESES = re.compile(r"^(.+?)\s*\((.+)\)$")
_SLASH = re.compile(r"^(.+?)\s?/\s?(.+)$")


def preprocess_row(cells: Sequence[str]) -> List[str]:
    """Drop blank leading and trailing cells, trim, and repair spaced-out words."""
    row = [repair_spaced_words((cell or "").strip()) for cell in cells]
    while row and not row[0]:
        row.pop(0)
    while row and not row[-1]:
        row.pop()
    return row


def _digits(code: str) -> str:
    return code.replace(".", "")


def classify(row: Sequence[str]) -> ClassifiedRow:
    """
    Decide what a preprocessed primary row describes from its shape.

    Three or more cells, or two cells led by a one or two digit code, make
    a province. Two cells with a regency-shaped code ("33.01" or "3301")
    make a regency; any other two-cell row is read as a district.
    """
    if len(row) <= 1:
        return SkipRow("separator")

    if len(row) >= 3:
        return ProvinceRow(code=row[1], name=row[2])

    code, name = row[0], row[1]
    digits = _digits(code)
    if digits.isdigit() and len(digits) <= 2:
        return ProvinceRow(code=code, name=name)
    if len(code) == REGENCY_CODE_LENGTH or (digits.isdigit() and len(digits) == 4):
        return RegencyRow(code=code, name=name)

    malformed = not (len(code) == DISTRICT_CODE_LENGTH or (digits.isdigit() and len(digits) in (6, 7)))
    return DistrictRow(code=code, name=name, malformed=malformed)


def province_alt_names(name: str) -> List[str]:
    for pattern, alt_names in PROVINCE_ALT_NAMES:
        if pattern.search(name):
            return list(alt_names)
    return []


def _create_province(tree: PlaceTree, name: str, code: Optional[str]) -> Place:
    return tree.add_place(
        level=PROVINCE_LEVEL,
        place_type=PlaceType.PROVINSI,
        name=name,
        nominal_name=name,
        full_name=f"Provinsi {name}",
        government_code=code,
        alt_names=province_alt_names(name),
    )


def build_province(tree: PlaceTree, row: ProvinceRow, context: BuilderContext) -> BuilderContext:
    name = normalize_name(row.name, True)
    name = re.sub(r"^Provinsi\s+", "", name)
    province = _create_province(tree, name, row.code)
    return BuilderContext(province_id=province.place_id, factual_province_id=province.place_id)


def split_regency_name(name: str):
    """
    Split a regency/city name into its type parts.

    Returns:
        Tuple of (place type, nominal name, type display prefix, short label)
    """
    for pattern, place_type, display, short in REGENCY_PREFIXES:
        match = pattern.match(name)
        if match:
            nominal = match.group(1)
            return place_type, nominal, display, short + nominal
    return PlaceType.KABUPATEN, name, "Kabupaten", "Kab. " + name


def _factual_province(tree: PlaceTree, province: Place, regency_name: str) -> Place:
    """The province a regency really belongs to, synthesizing split provinces."""
    split_name = split_province_for(province.name, regency_name)
    if split_name is None:
        return province

    existing = tree.by_path(slugify(split_name))
    if existing is not None:
        return existing

    log_structured("info", "Synthesizing province missing from primary source",
                   province=split_name, carved_from=province.name)
    return _create_province(tree, split_name, None)


def build_regency(tree: PlaceTree, row: RegencyRow, context: BuilderContext) -> BuilderContext:
    province = tree.get(context.province_id)
    if province is None:
        log_structured("warning", "Regency row before any province, skipped",
                       code=row.code, name=row.name)
        return context

    name = normalize_name(row.name, True)
    place_type, nominal, display, short_label = split_regency_name(name)
    parent = _factual_province(tree, province, name)

    regency = tree.add_place(
        level=REGENCY_LEVEL,
        place_type=place_type,
        name=name,
        nominal_name=nominal,
        full_name=f"{display} {nominal}",
        parent=parent,
        government_code=row.code,
        alt_names=[short_label],
    )
    return replace(context, factual_province_id=parent.place_id, regency_id=regency.place_id)


def twin_names_of(name: str) -> List[str]:
    """Both halves of "X (Y)" or "X/Y"; empty when the name is single."""
    match = _PARENTHESES.match(name) or _SLASH.match(name)
    if not match:
        return []
    return [half.strip() for half in match.groups() if half.strip()]


def build_district(tree: PlaceTree, row: DistrictRow, context: BuilderContext) -> BuilderContext:
    regency = tree.get(context.regency_id)
    if regency is None:
        log_structured("warning", "District row before any regency, skipped",
                       code=row.code, name=row.name)
        return context
    if row.malformed:
        log_structured("warning", "District code has unexpected shape",
                       code=row.code, name=row.name, regency=regency.path)

    name = normalize_name(row.name)
    province = tree.province_of(regency)
    place_type = PlaceType.DISTRIK if province.name.startswith("Papua") else PlaceType.KECAMATAN

    tree.add_place(
        level=DISTRICT_LEVEL,
        place_type=place_type,
        name=name,
        nominal_name=name,
        full_name=f"{place_type} {name}",
        parent=regency,
        government_code=row.code or None,
        twin_names=twin_names_of(name),
    )
    return context


def apply_row(tree: PlaceTree, context: BuilderContext, cells: Sequence[str]) -> BuilderContext:
    """Consume one raw primary row, returning the context for the next one."""
    row = classify(preprocess_row(cells))
    if isinstance(row, ProvinceRow):
        return build_province(tree, row, context)
    if isinstance(row, RegencyRow):
        return build_regency(tree, row, context)
    if isinstance(row, DistrictRow):
        return build_district(tree, row, context)
    return context


def build_tree(rows: Iterable[Sequence[str]], tree: Optional[PlaceTree] = None) -> PlaceTree:
    """
    Build the place tree from primary rows in source order.

    Args:
        rows: Raw CSV rows (depth-first preorder of the hierarchy)
        tree: Tree to extend (a new one by default)

    Returns:
        The populated tree
    """
    tree = tree if tree is not None else PlaceTree()
    context = BuilderContext()
    for cells in rows:
        context = apply_row(tree, context, cells)

    counts = {level: 0 for level in (PROVINCE_LEVEL, REGENCY_LEVEL, DISTRICT_LEVEL)}
    for place in tree:
        counts[place.level] += 1
    log_structured("info", "Place tree built",
                   provinces=counts[PROVINCE_LEVEL],
                   regencies=counts[REGENCY_LEVEL],
                   districts=counts[DISTRICT_LEVEL])
    return tree
