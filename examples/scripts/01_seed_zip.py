"""Seed.zip: element-wise pairing of same-length dimensions.

Demonstrates: Seed.zip, Seed.values, Map
Output: 5 paired records (city ↔ country ↔ population)
"""

from zipstrict import Map, Seed

pipeline = (
    Seed.zip(
        Seed.values("city", ["Paris", "Berlin", "Madrid", "Rome", "London"]),
        Seed.values("country", ["France", "Germany", "Spain", "Italy", "UK"]),
        Seed.values("population_millions", [2.1, 3.6, 3.2, 2.8, 8.9]),
    )
    >> Map(lambda r: {**r, "label": f"{r['city']}, {r['country']}"})
)

records = pipeline.run()
for record in records:
    print(record["label"], record["population_millions"])
