"""Data models for places, source rows and emitted facts."""
from dataclasses import dataclass, field
from typing import Optional, List, Set, Tuple, Union


class PlaceType:
    """Ontology class names of the administrative divisions."""
    PROVINSI = "Provinsi"
    KABUPATEN = "Kabupaten"
    KOTA = "Kota"
    KABUPATEN_ADMINISTRASI = "KabupatenAdministrasi"
    KOTA_ADMINISTRASI = "KotaAdministrasi"
    KECAMATAN = "Kecamatan"
    DISTRIK = "Distrik"


@dataclass
class Place:
    """
    A province, regency/city or district.

    Places live in a PlaceTree arena; `place_id` is the creation index and
    `parent_id` points at the enclosing place (None for provinces).
    """
    place_id: int
    level: int
    type: str
    name: str
    nominal_name: str
    full_name: str
    path: str
    government_code: Optional[str] = None
    stats_code: Optional[str] = None
    parent_id: Optional[int] = None
    alt_names: List[str] = field(default_factory=list)
    twin_names: List[str] = field(default_factory=list)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    equivalent_geonames: List[str] = field(default_factory=list)
    candidate_geonames: Set[str] = field(default_factory=set)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def labels(self) -> List[str]:
        """Deduplicated union of name, nominal name, alternate and twin names."""
        seen = []
        for label in [self.name, self.nominal_name, *self.alt_names, *self.twin_names]:
            if label and label not in seen:
                seen.append(label)
        return seen

    def add_alt_name(self, alt_name: str):
        if alt_name and alt_name not in self.alt_names:
            self.alt_names.append(alt_name)


# Primary source rows, classified by shape

@dataclass(frozen=True)
class ProvinceRow:
    code: str
    name: str


@dataclass(frozen=True)
class RegencyRow:
    code: str
    name: str


@dataclass(frozen=True)
class DistrictRow:
    code: str
    name: str
    malformed: bool = False


@dataclass(frozen=True)
class SkipRow:
    reason: str


ClassifiedRow = Union[ProvinceRow, RegencyRow, DistrictRow, SkipRow]


@dataclass(frozen=True)
class BuilderContext:
    """Places the next primary row is read under."""
    province_id: Optional[int] = None
    factual_province_id: Optional[int] = None
    regency_id: Optional[int] = None


@dataclass(frozen=True)
class StatsRow:
    """A row of the statistics-agency place/coordinate table."""
    code: str
    name: str
    parent_name: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]


@dataclass(frozen=True)
class GeonameRecord:
    """A record of the global geographic-names dump."""
    geoname_id: str
    ascii_name: str
    alternate_names: Tuple[str, ...]
    latitude: float
    longitude: float
    feature_class: str = ""

    def names(self) -> List[str]:
        ordered = []
        for name in (self.ascii_name, *self.alternate_names):
            if name and name not in ordered:
                ordered.append(name)
        return ordered
