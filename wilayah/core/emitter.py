"""Turn the finished place tree into RDF facts, in creation order."""
from typing import Callable, Iterator, Tuple, Union
from rdflib import Literal, Namespace, URIRef
from rdflib.namespace import OWL, RDF, RDFS, SKOS
from wilayah.core.config import GEONAMES_NS, ONTOLOGY_NS, PLACE_NS, STATS_CODE_NS
from wilayah.core.errors import SinkError
from wilayah.core.models import Place
from wilayah.core.normalization import slugify
from wilayah.core.place_index import PlaceTree

ONT = Namespace(ONTOLOGY_NS)
GEO = Namespace("http://www.w3.org/2003/01/geo/wgs84_pos#")

Fact = Tuple[URIRef, URIRef, Union[URIRef, Literal]]
FactSink = Callable[[Fact], None]


def place_uri(path: str) -> URIRef:
    return URIRef(PLACE_NS + path)


def stats_code_uri(stats_code: str) -> URIRef:
    return URIRef(STATS_CODE_NS + stats_code.replace(".", ""))


def geoname_uri(geoname_id: str) -> URIRef:
    return URIRef(f"{GEONAMES_NS}{geoname_id}/")


def place_facts(tree: PlaceTree, place: Place) -> Iterator[Fact]:
    """
    Facts describing one place, always in the same order.

    Type, preferred label, labels (each plain, then tagged Indonesian), parent, codes, coordinates, identities,
    twin-name identities, then GeoNames links.
    """
    uri = place_uri(place.path)
    parent = tree.parent(place)

    yield uri, RDF.type, ONT[place.type]
    yield uri, SKOS.prefLabel, Literal(place.full_name, lang="id")
    for label in place.labels():
        yield uri, RDFS.label, Literal(label)
        yield uri, RDFS.label, Literal(label, lang="id")

    if parent is not None:
        yield uri, ONT.hasParent, place_uri(parent.path)
    if place.government_code:
        yield uri, ONT.hasGovernmentCode, Literal(place.government_code)
    if place.stats_code:
        yield uri, ONT.hasStatsCode, Literal(place.stats_code)
    if place.has_coordinates:
        yield uri, GEO.lat, Literal(place.latitude)
        yield uri, GEO.long, Literal(place.longitude)

    if place.stats_code:
        yield uri, OWL.sameAs, stats_code_uri(place.stats_code)

    prefix = parent.path + "/" if parent is not None else ""
    for twin_name in place.twin_names:
        twin_path = prefix + slugify(twin_name)
        if twin_path != place.path:
            yield place_uri(twin_path), OWL.sameAs, uri

    for geoname_id in place.equivalent_geonames:
        yield uri, RDFS.seeAlso, geoname_uri(geoname_id)


def emit_facts(tree: PlaceTree) -> Iterator[Fact]:
    """All facts of the tree, place by place in creation order."""
    for place in tree:
        yield from place_facts(tree, place)


def write_facts(tree: PlaceTree, sink: FactSink) -> int:
    """
    Hand every fact to a sink.

    Args:
        tree: Finished place tree
        sink: Callable receiving one (subject, predicate, object) fact

    Returns:
        Number of facts written

    Raises:
        SinkError: The sink raised while accepting a fact
    """
    count = 0
    for fact in emit_facts(tree):
        try:
            sink(fact)
        except Exception as e:
            raise SinkError("emit", f"sink rejected fact {count}: {e}") from e
        count += 1
    return count
