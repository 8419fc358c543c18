"""Travel World Map geometry core.

Loads country polygons from a GeoJSON FeatureCollection, resolves a stable
identifier per country, filters rings by viewport, and decimates rings for
rendering. A map widget consumes the resulting plain data; nothing in this
package draws.
"""

__version__ = "0.1.0"
