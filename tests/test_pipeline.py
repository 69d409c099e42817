"""End-to-end tests of the linkage pipeline."""
import csv
import pytest
from rdflib import Graph, URIRef
from rdflib.namespace import OWL, RDFS
from wilayah.core.emitter import ONT, place_uri
from wilayah.core.errors import SinkError, SourceReadError
from wilayah.core.pipeline import run_pipeline
from wilayah.gazetteers.bps import BPSProvider
from wilayah.gazetteers.geonames import GeoNamesProvider
from wilayah.gazetteers.permendagri import PermendagriProvider


@pytest.fixture
def primary_csv(tmp_path, primary_rows):
    path = tmp_path / "buku-induk.csv"
    with open(path, "w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(primary_rows)
    return path


def _run(primary_csv, bps_csv, geonames_txt, sink):
    return run_pipeline(
        PermendagriProvider(primary_csv),
        BPSProvider(bps_csv),
        GeoNamesProvider(geonames_txt, country_code="ID"),
        sink,
    )


def test_full_run(primary_csv, bps_csv, geonames_txt):
    graph = Graph()
    result = _run(primary_csv, bps_csv, geonames_txt, graph.add)

    tree = result.tree
    assert len(tree) == 18
    assert result.reconcile_stats.moved == 2
    assert result.reconcile_stats.coordinates_propagated == 4
    assert result.match_stats.accepted == 2
    assert result.fact_count == len(graph)

    cilacap = place_uri("jawa-tengah/kabupaten-cilacap")
    assert (cilacap, RDFS.seeAlso, URIRef("http://sws.geonames.org/1646170/")) in graph
    assert (place_uri("jawa-tengah"), RDFS.seeAlso, URIRef("http://sws.geonames.org/1622786/")) in graph

    dayeuhluhur = tree.by_path("jawa-tengah/kabupaten-cilacap/dayeuhluhur")
    assert dayeuhluhur.stats_code == "3301010"
    assert (place_uri(dayeuhluhur.path), OWL.sameAs, URIRef("urn:kode-bps:3301010")) in graph
    assert (place_uri("kalimantan-selatan/kota-banjarmasin/banjar"), OWL.sameAs,
            place_uri("kalimantan-selatan/kota-banjarmasin/banjarmasin-banjar")) in graph
    assert (place_uri("dki-jakarta/kota-administrasi-jakarta-pusat"), None, ONT.KotaAdministrasi) in graph


def test_runs_are_deterministic(primary_csv, bps_csv, geonames_txt):
    first, second = [], []
    _run(primary_csv, bps_csv, geonames_txt, first.append)
    _run(primary_csv, bps_csv, geonames_txt, second.append)
    assert first == second


def test_missing_source_aborts(primary_csv, bps_csv, tmp_path):
    facts = []
    with pytest.raises(SourceReadError) as excinfo:
        _run(primary_csv, bps_csv, tmp_path / "missing.txt", facts.append)

    assert excinfo.value.source == "GeoNames"
    assert excinfo.value.stage == "match"
    assert facts == []


def test_sink_failure_aborts(primary_csv, bps_csv, geonames_txt):
    def sink(fact):
        raise RuntimeError("closed")

    with pytest.raises(SinkError):
        _run(primary_csv, bps_csv, geonames_txt, sink)
