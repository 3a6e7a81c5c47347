REGION_STATS = {
    "wall": {
        "opaque": True,
    },
    "pillar": {
        "opaque": True,
    },
    "water": {
        "opaque": False,
    },
    "lava": {
        "opaque": False,
    },
    "grass": {
        "opaque": False,
    },
    "stone": {
        "opaque": False,
    },
    "chest": {
        "opaque": False,
    },
}
