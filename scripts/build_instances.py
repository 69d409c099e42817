#!/usr/bin/env python3
"""CLI script to build the linked place dataset and write it as Turtle."""
import argparse
import sys
from pathlib import Path
from rdflib import Graph
from rdflib.namespace import OWL, RDF, RDFS, SKOS
from tqdm import tqdm
from wilayah.core.config import (
    GEONAMES_COUNTRY,
    GEONAMES_TXT,
    LOG_LEVEL,
    OUTPUT_TURTLE,
    PRIMARY_CSV,
    STATS_CSV,
)
from wilayah.core.emitter import GEO, ONT
from wilayah.core.errors import PipelineError
from wilayah.core.pipeline import run_pipeline
from wilayah.gazetteers.bps import BPSProvider
from wilayah.gazetteers.geonames import GeoNamesProvider
from wilayah.gazetteers.permendagri import PermendagriProvider
from wilayah.utils.logging import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Build linked data for Indonesian administrative divisions")
    parser.add_argument("--primary", type=Path, default=PRIMARY_CSV,
                       help="Permendagri register CSV")
    parser.add_argument("--bps", type=Path, default=STATS_CSV,
                       help="BPS place/coordinate CSV")
    parser.add_argument("--geonames", type=Path, default=GEONAMES_TXT,
                       help="GeoNames TSV dump")
    parser.add_argument("--country", default=GEONAMES_COUNTRY,
                       help="GeoNames country code filter (default: %(default)s)")
    parser.add_argument("--output", type=Path, default=OUTPUT_TURTLE,
                       help="Output Turtle file")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Log level")
    
    args = parser.parse_args()
    setup_logging(args.log_level)
    
    graph = Graph()
    graph.bind("rdf", RDF)
    graph.bind("rdfs", RDFS)
    graph.bind("owl", OWL)
    graph.bind("skos", SKOS)
    graph.bind("geo", GEO)
    graph.bind("", ONT)
    
    try:
        result = run_pipeline(
            PermendagriProvider(args.primary),
            BPSProvider(args.bps),
            GeoNamesProvider(args.geonames, country_code=args.country),
            graph.add,
            progress=lambda records: tqdm(records, desc="GeoNames", unit=" records"),
        )
    except PipelineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    
    # Serialize only a complete fact set
    args.output.parent.mkdir(parents=True, exist_ok=True)
    try:
        graph.serialize(destination=str(args.output), format="turtle")
    except OSError as e:
        print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
        sys.exit(1)
    
    print(f"✅ {len(result.tree)} places, {result.fact_count} facts written to {args.output}")


if __name__ == "__main__":
    main()
