"""Tests for rebuilding the place tree from register rows."""
from wilayah.core.models import (
    BuilderContext,
    DistrictRow,
    PlaceType,
    ProvinceRow,
    RegencyRow,
    SkipRow,
)
from wilayah.core.place_index import PlaceTree
from wilayah.core.tree_builder import (
    apply_row,
    build_tree,
    classify,
    preprocess_row,
    split_regency_name,
    twin_names_of,
)


def test_preprocess_row():
    assert preprocess_row(["", "  ", " 33 ", " J A W A  Tengah", ""]) == ["33", "JAWA  Tengah"]
    assert preprocess_row(["", ""]) == []


def test_classify_by_row_shape():
    assert classify([]) == SkipRow("separator")
    assert classify(["Kecamatan"]) == SkipRow("separator")
    assert classify(["1", "33", "Jawa Tengah"]) == ProvinceRow("33", "Jawa Tengah")
    assert classify(["33", "Jawa Tengah"]) == ProvinceRow("33", "Jawa Tengah")
    assert classify(["33.01", "Kab. Cilacap"]) == RegencyRow("33.01", "Kab. Cilacap")
    assert classify(["3301", "Kab. Cilacap"]) == RegencyRow("3301", "Kab. Cilacap")
    assert classify(["33.01.01", "Dayeuhluhur"]) == DistrictRow("33.01.01", "Dayeuhluhur")


def test_classify_flags_malformed_district():
    row = classify(["3301-01", "Dayeuhluhur"])
    assert isinstance(row, DistrictRow)
    assert row.malformed


def test_province_row():
    tree = build_tree([["", "33", "Jawa Tengah"]])
    province = tree.by_path("jawa-tengah")

    assert province.level == 1
    assert province.type == PlaceType.PROVINSI
    assert province.government_code == "33"
    assert province.full_name == "Provinsi Jawa Tengah"
    assert province.parent_id is None


def test_regency_row_under_province(tree):
    province = tree.by_path("jawa-tengah")
    regency = tree.by_path("jawa-tengah/kabupaten-cilacap")

    assert regency.nominal_name == "Cilacap"
    assert regency.type == PlaceType.KABUPATEN
    assert regency.full_name == "Kabupaten Cilacap"
    assert "Kab. Cilacap" in regency.alt_names
    assert tree.parent(regency) is province


def test_regency_types():
    assert split_regency_name("Kabupaten Administrasi Kepulauan Seribu") == (
        PlaceType.KABUPATEN_ADMINISTRASI, "Kepulauan Seribu",
        "Kabupaten Administrasi", "Kab. Adm. Kepulauan Seribu",
    )
    assert split_regency_name("Kota Administrasi Jakarta Pusat")[:2] == (
        PlaceType.KOTA_ADMINISTRASI, "Jakarta Pusat",
    )
    assert split_regency_name("Kota Magelang")[:2] == (PlaceType.KOTA, "Magelang")
    assert split_regency_name("Kabupaten Cilacap")[:2] == (PlaceType.KABUPATEN, "Cilacap")
    assert split_regency_name("Cilacap")[:2] == (PlaceType.KABUPATEN, "Cilacap")


def test_kota_administrasi_row(tree):
    regency = tree.by_path("dki-jakarta/kota-administrasi-jakarta-pusat")
    assert regency.type == PlaceType.KOTA_ADMINISTRASI
    assert regency.nominal_name == "Jakarta Pusat"
    assert "Kota Adm. Jakarta Pusat" in regency.alt_names


def test_province_alternate_names(tree):
    yogyakarta = tree.by_path("di-yogyakarta")
    jakarta = tree.by_path("dki-jakarta")

    assert "DIY" in yogyakarta.alt_names
    assert "Daerah Istimewa Yogyakarta" in yogyakarta.alt_names
    assert "DKI" in jakarta.alt_names
    assert "Jakarta" in jakarta.alt_names


def test_district_type_depends_on_province(tree):
    assert tree.by_path("papua-barat/kabupaten-fakfak/fakfak").type == PlaceType.DISTRIK
    district = tree.by_path("jawa-tengah/kabupaten-cilacap/dayeuhluhur")
    assert district.type == PlaceType.KECAMATAN
    assert district.full_name == "Kecamatan Dayeuhluhur"


def test_twin_names(tree):
    assert twin_names_of("Banjarmasin (Banjar)") == ["Banjarmasin", "Banjar"]
    assert twin_names_of("Siau/Biaro") == ["Siau", "Biaro"]
    assert twin_names_of("Gambir") == []

    district = tree.by_path("kalimantan-selatan/kota-banjarmasin/banjarmasin-banjar")
    assert district.twin_names == ["Banjarmasin", "Banjar"]
    # Twins are names of the same place, not places of their own
    assert tree.by_path("kalimantan-selatan/kota-banjarmasin/banjar") is None


def test_tree_invariants(tree):
    paths = [place.path for place in tree]
    assert len(paths) == len(set(paths))

    for place in tree:
        if place.level == 1:
            assert place.parent_id is None
        else:
            parent = tree.parent(place)
            assert parent is not None
            assert parent.level == place.level - 1


def test_context_is_passed_between_rows():
    tree = PlaceTree()
    context = apply_row(tree, BuilderContext(), ["", "33", "Jawa Tengah"])
    assert context.regency_id is None

    context = apply_row(tree, context, ["33.01", "Kab. Cilacap"])
    assert tree.get(context.regency_id).nominal_name == "Cilacap"

    same = apply_row(tree, context, ["", ""])
    assert same == context


def test_orphan_rows_are_skipped():
    tree = build_tree([
        ["33.01.01", "Dayeuhluhur"],
        ["33.01", "Kab. Cilacap"],
    ])
    assert len(tree) == 0


def test_malformed_district_still_created():
    tree = build_tree([
        ["", "33", "Jawa Tengah"],
        ["33.01", "Kab. Cilacap"],
        ["X", "Dayeuhluhur"],
    ])
    district = tree.by_path("jawa-tengah/kabupaten-cilacap/dayeuhluhur")
    assert district is not None
    assert district.government_code == "X"


def test_split_province_is_synthesized():
    tree = build_tree([
        ["", "64", "Kalimantan Timur"],
        ["64.01", "Kab. Paser"],
        ["64.71", "Kota Tarakan"],
        ["64.71.01", "Tarakan Barat"],
        ["64.02", "Kab. Bulungan"],
        ["64.72", "Kota Balikpapan"],
    ])
    timur = tree.by_path("kalimantan-timur")
    utara = tree.by_path("kalimantan-utara")

    assert utara is not None
    assert utara.government_code is None
    assert utara.stats_code is None
    assert tree.parent(tree.by_path("kalimantan-utara/kota-tarakan")) is utara
    assert tree.parent(tree.by_path("kalimantan-utara/kabupaten-bulungan")) is utara
    assert tree.by_path("kalimantan-utara/kota-tarakan/tarakan-barat") is not None
    assert tree.parent(tree.by_path("kalimantan-timur/kota-balikpapan")) is timur
    assert len([place for place in tree if place.level == 1]) == 2
