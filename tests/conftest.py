"""Pytest configuration and fixtures."""
import pytest
from wilayah.core.place_index import PlaceTree
from wilayah.core.tree_builder import build_tree


@pytest.fixture
def primary_rows():
    """A small excerpt of the register, with the export's blank cells and noise."""
    return [
        ["", "", "", ""],
        ["", "33", "Jawa Tengah"],
        ["3301", "Kab. Cilacap"],
        ["33.01.01", "Dayeuhluhur"],
        ["33.01.02", "Wanareja"],
        ["33.71", "Kota Magelang"],
        ["33.71.01", "Magelang Utara"],
        ["", "34", "Daista Yogyakarta"],
        ["34.71", "Kota Yogyakarta"],
        ["34.71.01", "Mantrijeron"],
        ["", "31", "DKI Jakarta"],
        ["31.71", "Kota Adm. Jakarta Pusat"],
        ["31.71.01", "Gambir"],
        ["", "63", "Kalimantan Selatan"],
        ["63.71", "Kota Banjarmasin"],
        ["63.71.01", "Banjarmasin (Banjar)"],
        ["", "91", "Papua Barat"],
        ["91.01", "Kab. Fakfak"],
        ["91.01.01", "Fakfak"],
    ]


@pytest.fixture
def tree(primary_rows) -> PlaceTree:
    """Tree built from the register excerpt."""
    return build_tree(primary_rows)


@pytest.fixture
def bps_csv(tmp_path):
    """BPS table: a province, a regency with a corrected code, a district, noise."""
    content = "\n".join([
        "serial,name,nid,parent_nid,latitude,longitude",
        "33,JAWA TENGAH,1,,-7.15,110.14",
        "3301,CILACAP,2,1,-7.72,109.00",
        "3301010,DAYEUHLUHUR,3,2,-7.21,108.41",
        "3399,MAGELANG,4,1,-7.47,110.22",
        "500,INVALID BAND,5,1,0,0",
        "0,ZERO,6,,0,0",
    ])
    path = tmp_path / "bps.csv"
    path.write_text(content + "\n", encoding="utf-8")
    return path


@pytest.fixture
def geonames_txt(tmp_path):
    """GeoNames dump with two Indonesian records and one from another country."""
    def line(geoname_id, name, alternates, lat, lon, feature_class, country):
        cols = [geoname_id, name, name, alternates, str(lat), str(lon), feature_class, "ADM2",
                country, "", "", "", "", "", "0", "", "0", "Asia/Jakarta", "2020-01-01"]
        return "\t".join(cols)

    content = "\n".join([
        line("1646170", "Cilacap", "Kabupaten Cilacap,Tjilatjap", -7.6, 109.1, "A", "ID"),
        line("1622786", "Jawa Tengah", "Central Java,Provinsi Jawa Tengah", -7.5, 110.0, "A", "ID"),
        line("9999999", "Cilacap", "", -7.6, 109.1, "P", "MY"),
    ])
    path = tmp_path / "ID.txt"
    path.write_text(content + "\n", encoding="utf-8")
    return path
