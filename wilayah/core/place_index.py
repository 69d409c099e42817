"""Place arena and the lookup indices built over it."""
from typing import Dict, Iterator, List, Optional
from wilayah.core.models import Place
from wilayah.core.normalization import name_key, slugify
from wilayah.utils.logging import log_structured


def stats_code_from(government_code: Optional[str]) -> Optional[str]:
    """Provisional statistics-agency code: the government code without dots."""
    if not government_code:
        return None
    digits = government_code.replace(".", "").strip()
    return digits or None


class NameIndex:
    """Lowercased name -> places carrying it, in creation order."""

    def __init__(self):
        self._by_name: Dict[str, List[int]] = {}

    def add(self, name: str, place_id: int):
        key = name_key(name)
        if not key:
            return
        ids = self._by_name.setdefault(key, [])
        if place_id not in ids:
            ids.append(place_id)

    def get(self, name: str) -> List[int]:
        return list(self._by_name.get(name_key(name), []))

    def __contains__(self, name: str) -> bool:
        return name_key(name) in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


class CodeIndex:
    """
    Statistics-agency code -> place, single-valued at any instant.

    `move` is the only way to rebind a code: the place's previous binding is
    dropped and whichever place held the new code loses it.
    """

    def __init__(self):
        self._by_code: Dict[str, int] = {}

    def move(self, code: str, place: Place) -> Optional[int]:
        """
        Bind `code` to `place` atomically.

        Args:
            code: New statistics-agency code
            place: Place receiving it

        Returns:
            Id of the place evicted from `code`, if another place held it
        """
        old_code = place.stats_code
        if old_code and self._by_code.get(old_code) == place.place_id:
            del self._by_code[old_code]

        evicted = None
        holder = self._by_code.get(code)
        if holder is not None and holder != place.place_id:
            evicted = holder

        self._by_code[code] = place.place_id
        place.stats_code = code
        return evicted

    def get(self, code: str) -> Optional[int]:
        return self._by_code.get(code)

    def items(self):
        return list(self._by_code.items())

    def __contains__(self, code: str) -> bool:
        return code in self._by_code

    def __len__(self) -> int:
        return len(self._by_code)


class PlaceTree:
    """
    Append-only arena of places plus the path, name and code indices.

    Iteration yields places in creation order.
    """

    def __init__(self):
        self.places: List[Place] = []
        self.path_index: Dict[str, int] = {}
        self.name_index = NameIndex()
        self.code_index = CodeIndex()

    def add_place(
        self,
        level: int,
        place_type: str,
        name: str,
        nominal_name: str,
        full_name: str,
        parent: Optional[Place] = None,
        government_code: Optional[str] = None,
        alt_names: Optional[List[str]] = None,
        twin_names: Optional[List[str]] = None,
    ) -> Place:
        """
        Create a place and register it in every index.

        Args:
            level: 1 province, 2 regency/city, 3 district
            place_type: Ontology class name
            name: Canonical name
            nominal_name: Name without the type prefix
            full_name: Preferred label
            parent: Enclosing place (None for provinces)
            government_code: Primary-source code
            alt_names: Alternate labels
            twin_names: Co-equal local names of the same place

        Returns:
            The created place
        """
        if parent is not None and parent.level != level - 1:
            raise ValueError(
                f"{full_name} (level {level}) cannot be placed under {parent.full_name} (level {parent.level})"
            )

        stats_code = stats_code_from(government_code)
        place = Place(
            place_id=len(self.places),
            level=level,
            type=place_type,
            name=name,
            nominal_name=nominal_name,
            full_name=full_name,
            path=self._unique_path(parent, name, stats_code),
            government_code=government_code,
            parent_id=parent.place_id if parent is not None else None,
        )
        for alt_name in alt_names or []:
            place.add_alt_name(alt_name)
        for twin_name in twin_names or []:
            if twin_name not in place.twin_names:
                place.twin_names.append(twin_name)

        self.places.append(place)
        self.path_index[place.path] = place.place_id
        for label in place.labels():
            self.name_index.add(label, place.place_id)
        if stats_code in self.code_index:
            log_structured("warning", "Duplicate government code in primary source",
                           code=stats_code, place=place.path)
        elif stats_code:
            self.code_index.move(stats_code, place)

        return place

    def _unique_path(self, parent: Optional[Place], name: str, stats_code: Optional[str]) -> str:
        prefix = parent.path + "/" if parent is not None else ""
        path = prefix + slugify(name)
        if path not in self.path_index:
            return path

        base = f"{path}-{stats_code}" if stats_code else path
        candidate, counter = base, 2
        while candidate in self.path_index:
            candidate = f"{base}-{counter}"
            counter += 1
        log_structured("warning", "Path collision, leaf disambiguated",
                       path=path, disambiguated=candidate)
        return candidate

    def get(self, place_id: Optional[int]) -> Optional[Place]:
        if place_id is None:
            return None
        return self.places[place_id]

    def parent(self, place: Place) -> Optional[Place]:
        return self.get(place.parent_id)

    def province_of(self, place: Place) -> Place:
        """Walk up to the level-1 ancestor (a province is its own province)."""
        current = place
        while current.parent_id is not None:
            current = self.places[current.parent_id]
        return current

    def by_path(self, path: str) -> Optional[Place]:
        return self.get(self.path_index.get(path))

    def by_name(self, name: str) -> List[Place]:
        return [self.places[place_id] for place_id in self.name_index.get(name)]

    def by_code(self, code: str) -> Optional[Place]:
        return self.get(self.code_index.get(code))

    def move_code(self, code: str, place: Place) -> Optional[Place]:
        """Rebind a statistics code; the evicted holder loses its code."""
        evicted = self.get(self.code_index.move(code, place))
        if evicted is not None:
            evicted.stats_code = None
        return evicted

    def __iter__(self) -> Iterator[Place]:
        return iter(list(self.places))

    def __len__(self) -> int:
        return len(self.places)
