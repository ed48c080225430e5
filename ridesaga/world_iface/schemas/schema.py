from typing import Any, Dict
def _range_pair(kind: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": kind}, "minItems": 2, "maxItems": 2}
def get_schema() -> Dict[str, Any]:
    number = {"type": "number"}
    integer = {"type": "integer"}
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "ridesaga world scenario",
        "type": "object",
        "required": ["world", "randomness"],
        "properties": {
            "world": {
                "type": "object",
                "required": ["width", "height"],
                "properties": {
                    "type": {"type": "string", "enum": ["grid"]},
                    "width": {"type": "integer", "minimum": 1},
                    "height": {"type": "integer", "minimum": 1},
                    "wrap": {
                        "type": "object",
                        "properties": {"x": {"type": "boolean"}, "y": {"type": "boolean"}},
                    },
                },
            },
            "randomness": {
                "type": "object",
                "required": ["seed"],
                "properties": {
                    "seed": integer,
                    "partitions": {"type": "object", "additionalProperties": integer},
                },
            },
            "elevation_profile": {
                "type": "object",
                "properties": {
                    "tiles_per_range": {"type": "integer", "minimum": 1},
                    "range_peak": number,
                    "range_jitter": number,
                    "range_falloff": number,
                    "tiles_per_basin": {"type": "integer", "minimum": 1},
                    "basin_depth": number,
                    "noise_point_fraction": {"type": "number", "minimum": 0, "maximum": 1},
                    "base_elevation": {"type": "number", "minimum": 0, "maximum": 100},
                    "diffusion_passes": {"type": "integer", "minimum": 0},
                    "diffusion_noise": {"type": "number", "minimum": 0},
                },
            },
            "climate_profile": {
                "type": "object",
                "properties": {
                    "lapse": number,
                    "base_humidity": number,
                    "humidity_jitter": number,
                    "ridge_elevation": number,
                    "orographic": number,
                    "water_elevation": number,
                    "water_radius": {"type": "number", "exclusiveMinimum": 0},
                    "water_bonus": number,
                    "smoothing_radius": {"type": "integer", "minimum": 0},
                    "smoothing_keep": {"type": "number", "minimum": 0, "maximum": 1},
                    "volcanic_chance": {"type": "number", "minimum": 0, "maximum": 1},
                },
            },
            "hydrology_profile": {
                "type": "object",
                "properties": {
                    "river_count": {"type": "integer", "minimum": 0},
                    "river_source_elevation": number,
                    "river_spacing_divisor": {"type": "number", "exclusiveMinimum": 0},
                    "river_mouth_elevation": number,
                    "tiles_per_lake": {"type": "integer", "minimum": 1},
                    "lake_elevation": _range_pair("number"),
                    "lake_radius": _range_pair("integer"),
                    "lake_level": number,
                },
            },
            "regions": {
                "type": "object",
                "properties": {
                    "tiles_per_region": {"type": "integer", "minimum": 1},
                    "spacing_divisor": {"type": "number", "exclusiveMinimum": 0},
                    "placement_attempts": {"type": "integer", "minimum": 1},
                    "size": _range_pair("integer"),
                },
            },
            "settlements": {
                "type": "object",
                "properties": {
                    "per_region": {"type": "integer", "minimum": 0},
                    "spacing_divisor": {"type": "number", "exclusiveMinimum": 0},
                    "top_candidates": {"type": "integer", "minimum": 1},
                    "town_chance": {"type": "number", "minimum": 0, "maximum": 1},
                    "water_radius": {"type": "integer", "minimum": 1},
                    "plains_bonus": number,
                    "water_weight": number,
                    "water_bonus": number,
                    "path_weight": number,
                    "village_shop_chance": {"type": "number", "minimum": 0, "maximum": 1},
                    "village_blacksmith_chance": {"type": "number", "minimum": 0, "maximum": 1},
                    "dungeons_per_region": {"type": "number", "minimum": 0},
                    "landmarks_per_region": {"type": "number", "minimum": 0},
                },
            },
            "roads": {
                "type": "object",
                "properties": {
                    "jitter": {"type": "number", "minimum": 0},
                    "poi_link_chance": {"type": "number", "minimum": 0, "maximum": 1},
                },
            },
            "exploration": {
                "type": "object",
                "properties": {
                    "reveal_radius": {"type": "number", "minimum": 0},
                    "start_radius": {"type": "number", "minimum": 0},
                    "discover_distance": {"type": "number", "minimum": 0},
                    "explore_distance": {"type": "number", "minimum": 0},
                    "region_discover_percent": {"type": "number", "minimum": 0, "maximum": 100},
                    "impassable_cost": {"type": "number", "exclusiveMinimum": 0},
                },
            },
            "terrain": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["name", "movement_cost", "danger_level"],
                    "properties": {
                        "name": {"type": "string"},
                        "movement_cost": {"type": "number", "minimum": 0},
                        "danger_level": {"type": "integer", "minimum": 0},
                    },
                },
            },
        },
    }
