import numpy as np
import pandas as pd
from pathlib import Path

rng = np.random.default_rng(7)
out = Path("data/mock")
out.mkdir(parents=True, exist_ok=True)

# Weekly school status counts across 2020
dates = pd.date_range("2020-01-01", "2020-12-31", freq="7D")
closed = rng.integers(0, 150, size=len(dates))
academic_break = rng.integers(0, 20, size=len(dates))
partially_open = rng.integers(0, 40, size=len(dates))
fully_open = np.clip(210 - closed - academic_break - partially_open, 0, None)

covid = pd.DataFrame(
    {
        "Date": dates.strftime("%Y-%m-%d"),
        "Fully_Open": fully_open,
        "Partially_Open": partially_open,
        "Closed": closed,
        "Academic_Break": academic_break,
    }
)
covid.to_csv(out / "cleaned_covid.csv", index=False)

regions = ["SA", "ECA", "MENA", "SSA", "LAC", "EAP", "NA"]
statuses = ["Least Developed", "Less Developed", "More Developed"]
n_countries = 40

female = rng.integers(0, 60, size=n_countries)
male = rng.integers(0, 60, size=n_countries)
rural = rng.integers(0, 60, size=n_countries)
urban = rng.integers(0, 40, size=n_countries)

lower_secondary = pd.DataFrame(
    {
        "Countries and areas": [f"Country {i}" for i in range(n_countries)],
        "Region": rng.choice(regions, size=n_countries),
        "Total": (female + male) // 2,
        "Female": female,
        "Male": male,
        "Rural_Residence": rural,
        "Urban_Residence": urban,
        "Development Regions": rng.choice(statuses, size=n_countries),
    }
)
lower_secondary.to_csv(out / "Lower_Secondary.csv", index=False)

primary = pd.DataFrame(
    {
        "Region": regions,
        "Female": rng.integers(1, 25, size=len(regions)),
        "Male": rng.integers(1, 25, size=len(regions)),
        "Urban": rng.integers(1, 15, size=len(regions)),
        "Rural": rng.integers(1, 30, size=len(regions)),
    }
)
primary.to_csv(out / "primary_demographics.csv", index=False)

countries = ["Nigeria", "India", "Brazil", "Kenya", "Peru"]
years = list(range(2015, 2022))
rows = []
for name in countries:
    base = rng.uniform(2, 40)
    for year in years:
        value = round(max(base + rng.normal(0, 2), 0.5), 1)
        rows.append({"name": name, "year": year, "value": value, "upper": value + 3, "lower": max(value - 3, 0)})
pd.DataFrame(rows).to_csv(out / "OOS_Rates_clean.csv", index=False)

print("wrote mock datasets to", out, "rows:", len(covid), len(lower_secondary), len(primary), len(rows))
