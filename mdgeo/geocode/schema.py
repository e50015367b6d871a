SERVICE = {
    "name": "md_composite_locator",
    "source_name": "Maryland iMAP Composite Locator (ArcGIS GeocodeServer)",
    "wkid": 3857,
    "operations": {
        "batch": "geocodeAddresses",
        "reverse": "reverseGeocode",
        "candidates": "findAddressCandidates",
    },
    "limitations": "Coordinates are Web Mercator; unmatched batch records are returned without a location.",
}

# ArcGIS reports Web Mercator under its legacy wkid as well
WEB_MERCATOR_WKIDS = (3857, 102100, 102113, 900913)

OBJECT_ID = "OBJECTID"
RESULT_ID = "ResultID"
SINGLE_LINE = "SingleLine"
ADDRESS = "Address"
CITY = "City"
POSTAL = "Postal"
MATCH_ADDR = "Match_addr"
