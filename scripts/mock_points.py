import numpy as np
import pandas as pd
from pathlib import Path

n_points = 200

rng = np.random.default_rng(7)

df = pd.DataFrame(
    {
        "id": np.arange(n_points),
        "lat": 37.75 + rng.normal(scale=0.05, size=n_points),
        "lng": -122.45 + rng.normal(scale=0.05, size=n_points),
        "magnitude": rng.uniform(0, 10, size=n_points).round(2),
        "category": rng.choice(["park", "cafe", "museum"], size=n_points),
    }
)

out = Path("config/data")
out.mkdir(parents=True, exist_ok=True)
df.to_csv(out / "points.csv", index=False)
print("wrote config/data/points.csv", df.shape)
