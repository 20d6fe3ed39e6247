import pandas as pd
import numpy as np

ZONES = ["central", "north", "south", "east", "west"]

def generate_mock_drivers(filename="mock_drivers_100.csv", count=100):
    """
    Generates a courier pool around a city centre with realistic stat spreads.
    Roughly 20% of drivers are unusable for dispatch (offline, unverified or
    without a location ping) so the eligibility filter has something to do.
    """
    # Hyderabad city centre
    base_lat = 17.385044
    base_lng = 78.486671

    rows = []
    for i in range(count):
        # Scatter drivers randomly around the city center (roughly +/- 8km)
        lat = base_lat + np.random.uniform(-0.075, 0.075)
        lng = base_lng + np.random.uniform(-0.075, 0.075)
        has_location = np.random.random() > 0.03

        rows.append({
            "driver_id": f"DRV-{str(i+1).zfill(3)}",
            "name": f"Courier {i+1}",
            "lat": np.round(lat, 6) if has_location else None,
            "lng": np.round(lng, 6) if has_location else None,
            "rating": np.round(np.clip(np.random.normal(4.5, 0.4), 1.0, 5.0), 2),
            "completion_rate": np.round(np.random.uniform(80, 100), 1),
            "on_time_rate": np.round(np.random.uniform(70, 100), 1),
            "acceptance_rate": np.round(np.random.uniform(50, 100), 1),
            "total_deliveries": np.random.randint(0, 3000),
            "vehicle_type": np.random.choice(["bike", "scooter", "car"], p=[0.6, 0.3, 0.1]),
            "current_zone": np.random.choice(ZONES),
            "home_zone": np.random.choice(ZONES),
            "is_online": np.random.random() < 0.9,
            "is_available": np.random.random() < 0.9,
            "status": "active",
            "verification_status": np.random.choice(["verified", "pending"], p=[0.95, 0.05]),
        })

    df = pd.DataFrame(rows)
    df.to_csv(filename, index=False)
    print(f"Successfully generated {count} mock drivers into '{filename}'.")

if __name__ == "__main__":
    generate_mock_drivers()
