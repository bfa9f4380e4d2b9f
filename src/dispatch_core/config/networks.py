# config/networks.py
# Built-in road networks, expressed as plain config mappings for DispatchModel.

ISLAMABAD_STATIONS = [
    {"id": 0, "name": "Main Station", "lat": 33.6844, "lon": 73.0479},
    {"id": 1, "name": "Blue Area", "lat": 33.7182, "lon": 73.0605},
    {"id": 2, "name": "G-6 Sector", "lat": 33.7100, "lon": 73.0800},
    {"id": 3, "name": "Margalla Road", "lat": 33.7400, "lon": 73.0900},
    {"id": 4, "name": "Airport Road", "lat": 33.6167, "lon": 73.0992},
]

ISLAMABAD_ROADS = [
    {"a": 0, "b": 1, "name": "Constitution Ave", "weight": 6, "width": 18},
    {"a": 0, "b": 3, "name": "Margalla Road", "weight": 8, "width": 16},
    {"a": 1, "b": 2, "name": "Jinnah Avenue", "weight": 5, "width": 14},
    {"a": 1, "b": 4, "name": "Srinagar Highway", "weight": 12, "width": 20},
    {"a": 2, "b": 3, "name": "G-6 Link Road", "weight": 7, "width": 12},
    {"a": 3, "b": 4, "name": "Northern Bypass", "weight": 15, "width": 18},
    {"a": 0, "b": 2, "name": "Main Expressway", "weight": 9, "width": 22},
    {"a": 0, "b": 4, "name": "Airport Highway", "weight": 18, "width": 26},
    {"a": 1, "b": 3, "name": "Blue Area Link", "weight": 10, "width": 14},
    {"a": 2, "b": 4, "name": "Scenic Route", "weight": 16, "width": 20},
]

ISLAMABAD = {"stations": ISLAMABAD_STATIONS, "roads": ISLAMABAD_ROADS}

NETWORKS = {"islamabad": ISLAMABAD}


def default_config(**overrides) -> dict:
    cfg = {
        "name": "islamabad",
        "run_id": "local",
        "network": ISLAMABAD,
        "viewport": {"center": (33.6844, 73.0479), "zoom": 13.0},
    }
    cfg.update(overrides)
    return cfg
