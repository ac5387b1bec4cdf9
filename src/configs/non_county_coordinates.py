"""
Hand-maintained centroids for geographies that are not counties.

States whose metrics sheets report by region, district office or city
(see GEOGRAPHY_TYPE in states.py) cannot be joined against the county
gazetteer. Entries are keyed by the geography text exactly as it appears
in the metrics sheets. CT and WA also list county names because their
sheets use county names under a region geography type.
"""

from types import MappingProxyType

NON_COUNTY_COORDINATES = MappingProxyType({
    # OCS regions
    "AK": {
        "Anchorage": {"lat": 61.22, "lng": -149.90},
        "Northern": {"lat": 64.84, "lng": -147.72},
        "Southcentral": {"lat": 61.58, "lng": -149.44},
        "Southeast": {"lat": 58.30, "lng": -134.42},
        "Western": {"lat": 60.79, "lng": -161.76},
    },
    # DCF regions plus the abolished county names still used in the sheets
    "CT": {
        "R1": {"lat": 41.19, "lng": -73.20},
        "R2": {"lat": 41.31, "lng": -72.93},
        "R3": {"lat": 41.56, "lng": -72.65},
        "R4": {"lat": 41.77, "lng": -72.67},
        "R5": {"lat": 41.56, "lng": -73.05},
        "R6": {"lat": 41.54, "lng": -72.81},
        "Fairfield": {"lat": 41.22, "lng": -73.32},
        "Hartford": {"lat": 41.76, "lng": -72.69},
        "Litchfield": {"lat": 41.75, "lng": -73.19},
        "Middlesex": {"lat": 41.44, "lng": -72.52},
        "New Haven": {"lat": 41.35, "lng": -72.90},
        "New London": {"lat": 41.52, "lng": -72.10},
        "Tolland": {"lat": 41.87, "lng": -72.33},
        "Windham": {"lat": 41.83, "lng": -72.00},
    },
    "DC": {
        "District of Columbia": {"lat": 38.91, "lng": -77.04},
    },
    # counties and district office cities
    "NH": {
        "Belknap": {"lat": 43.52, "lng": -71.42},
        "Carroll": {"lat": 43.87, "lng": -71.20},
        "Cheshire": {"lat": 42.92, "lng": -72.25},
        "Coos": {"lat": 44.69, "lng": -71.31},
        "Grafton": {"lat": 43.94, "lng": -71.82},
        "Hillsborough": {"lat": 42.91, "lng": -71.72},
        "Merrimack": {"lat": 43.30, "lng": -71.68},
        "Rockingham": {"lat": 42.99, "lng": -71.09},
        "Strafford": {"lat": 43.29, "lng": -71.03},
        "Sullivan": {"lat": 43.36, "lng": -72.22},
        "Berlin": {"lat": 44.47, "lng": -71.19},
        "Claremont": {"lat": 43.38, "lng": -72.35},
        "Concord": {"lat": 43.21, "lng": -71.54},
        "Conway": {"lat": 43.98, "lng": -71.13},
        "Keene": {"lat": 42.93, "lng": -72.28},
        "Laconia": {"lat": 43.53, "lng": -71.47},
        "Littleton": {"lat": 44.31, "lng": -71.77},
        "Manchester": {"lat": 42.99, "lng": -71.45},
        "Seacoast": {"lat": 43.07, "lng": -70.76},  # Portsmouth area
        "Southern": {"lat": 42.87, "lng": -71.38},  # Nashua area
        "Southern Telework": {"lat": 42.87, "lng": -71.38},
    },
    # district office cities
    "SD": {
        "Aberdeen": {"lat": 45.46, "lng": -98.49},
        "Brookings": {"lat": 44.31, "lng": -96.80},
        "Chamberlain": {"lat": 43.81, "lng": -99.33},
        "Deadwood*": {"lat": 44.38, "lng": -103.73},
        "Eagle Butte": {"lat": 45.00, "lng": -101.23},
        "Hot Springs": {"lat": 43.43, "lng": -103.48},
        "Huron": {"lat": 44.36, "lng": -98.21},
        "Lake Andes": {"lat": 43.16, "lng": -98.54},
        "Mission": {"lat": 43.31, "lng": -100.66},
        "Mitchell": {"lat": 43.71, "lng": -98.03},
        "Mobridge": {"lat": 45.54, "lng": -100.43},
        "Pierre": {"lat": 44.37, "lng": -100.35},
        "Rapid City": {"lat": 44.08, "lng": -103.23},
        "Sioux Falls": {"lat": 43.55, "lng": -96.73},
        "Sturgis": {"lat": 44.41, "lng": -103.51},
        "Vermillion": {"lat": 42.78, "lng": -96.93},
        "Watertown": {"lat": 44.90, "lng": -97.12},
        "Winner": {"lat": 43.38, "lng": -99.86},
        "Yankton": {"lat": 42.87, "lng": -97.40},
    },
    # district office cities
    "VT": {
        "Barre": {"lat": 44.20, "lng": -72.50},
        "Bennington": {"lat": 42.88, "lng": -73.20},
        "Brattleboro": {"lat": 42.85, "lng": -72.56},
        "Burlington": {"lat": 44.48, "lng": -73.21},
        "Hartford": {"lat": 43.66, "lng": -72.34},
        "Middlebury": {"lat": 44.02, "lng": -73.17},
        "Morrisville": {"lat": 44.56, "lng": -72.60},
        "Newport": {"lat": 44.94, "lng": -72.21},
        "Rutland": {"lat": 43.61, "lng": -72.97},
        "Springfield": {"lat": 43.30, "lng": -72.48},
        "St. Albans": {"lat": 44.81, "lng": -73.08},
        "St. Johnsbury": {"lat": 44.42, "lng": -72.02},
    },
    # DCYF regions plus county names reported under the region type
    "WA": {
        "Region 1": {"lat": 47.66, "lng": -117.43},
        "Region 2": {"lat": 46.60, "lng": -120.51},
        "Region 3": {"lat": 47.98, "lng": -122.20},
        "Region 4": {"lat": 47.61, "lng": -122.33},
        "Region 5": {"lat": 47.25, "lng": -122.44},
        "Region 6": {"lat": 45.64, "lng": -122.66},
        "Adams": {"lat": 46.98, "lng": -118.56},
        "Asotin": {"lat": 46.19, "lng": -117.21},
        "Benton": {"lat": 46.24, "lng": -119.52},
        "Chelan": {"lat": 47.86, "lng": -120.62},
        "Clallam": {"lat": 48.11, "lng": -123.94},
        "Clark": {"lat": 45.78, "lng": -122.48},
        "Columbia": {"lat": 46.30, "lng": -117.91},
        "Cowlitz": {"lat": 46.19, "lng": -122.68},
        "Douglas": {"lat": 47.74, "lng": -119.69},
        "Ferry": {"lat": 48.47, "lng": -118.52},
        "Franklin": {"lat": 46.54, "lng": -118.89},
        "Garfield": {"lat": 46.43, "lng": -117.54},
        "Grant": {"lat": 47.21, "lng": -119.45},
        "Grays Harbor": {"lat": 47.15, "lng": -123.76},
        "Island": {"lat": 48.16, "lng": -122.68},
        "Jefferson": {"lat": 47.76, "lng": -123.51},
        "King": {"lat": 47.49, "lng": -121.84},
        "Kitsap": {"lat": 47.64, "lng": -122.65},
        "Kittitas": {"lat": 47.12, "lng": -120.68},
        "Klickitat": {"lat": 45.87, "lng": -120.78},
        "Lewis": {"lat": 46.58, "lng": -122.38},
        "Lincoln": {"lat": 47.58, "lng": -118.41},
        "Mason": {"lat": 47.35, "lng": -123.18},
        "Okanogan": {"lat": 48.55, "lng": -119.74},
        "Pacific": {"lat": 46.56, "lng": -123.78},
        "Pend Oreille": {"lat": 48.53, "lng": -117.27},
        "Pierce": {"lat": 47.04, "lng": -122.13},
        "San Juan": {"lat": 48.53, "lng": -123.02},
        "Skagit": {"lat": 48.48, "lng": -121.80},
        "Skamania": {"lat": 46.02, "lng": -121.92},
        "Snohomish": {"lat": 48.04, "lng": -121.76},
        "Spokane": {"lat": 47.62, "lng": -117.40},
        "Stevens": {"lat": 48.40, "lng": -117.86},
        "Thurston": {"lat": 46.93, "lng": -122.78},
        "Wahkiakum": {"lat": 46.29, "lng": -123.42},
        "Walla Walla": {"lat": 46.23, "lng": -118.48},
        "Whatcom": {"lat": 48.85, "lng": -122.08},
        "Whitman": {"lat": 46.90, "lng": -117.52},
        "Yakima": {"lat": 46.46, "lng": -120.51},
    },
})
