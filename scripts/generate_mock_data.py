import pandas as pd
import numpy as np
import uuid

def generate_mock_orders(num_orders=200, num_merchants=30, output_file="raw_orders_generated.csv"):
    """
    Generates a dataset of pending delivery orders for the assignment simulation.
    A fixed set of 'merchants' (pickups) concentrates demand so couriers near
    busy kitchens pick up load and the load score starts to matter.
    """
    # Hyderabad city centre, same as the mock drivers
    CENTER_LAT = 17.385044
    CENTER_LNG = 78.486671

    # 1. Generate fixed merchants (pickups)
    merchants = []
    for merchant_index in range(num_merchants):
        # Merchants placed within a ~5km radius (roughly 0.05 degrees)
        merchants.append({
            "id": f"m_{str(uuid.uuid4())[:8]}",
            "name": f"Restaurant {merchant_index+1}",
            "lat": CENTER_LAT + np.random.uniform(-0.05, 0.05),
            "lng": CENTER_LNG + np.random.uniform(-0.05, 0.05),
        })

    data = []

    # 2. Generate Orders (row order = arrival order)
    for order_index in range(num_orders):
        merchant = np.random.choice(merchants)

        # Dropoff placed within ~5-8km of the merchant
        dropoff_lat = merchant["lat"] + np.random.uniform(-0.06, 0.06)
        dropoff_lng = merchant["lng"] + np.random.uniform(-0.06, 0.06)

        data.append({
            "order_id": f"o_{str(order_index+1).zfill(6)}",
            "pickup_lat": np.round(merchant["lat"], 6),
            "pickup_lng": np.round(merchant["lng"], 6),
            "dropoff_lat": np.round(dropoff_lat, 6),
            "dropoff_lng": np.round(dropoff_lng, 6),
            "estimated_prep_minutes": np.random.randint(5, 30),
            "order_value": np.round(np.random.uniform(150.0, 1500.0), 2),
            "priority": np.random.choice(["normal", "high", "urgent"], p=[0.8, 0.15, 0.05]),
            "pickup_address": merchant["name"],
        })

    # 3. Save to CSV
    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_orders} orders and saved to '{output_file}'")

    print("\nPriority mix:")
    for name, count in df["priority"].value_counts().items():
        print(f"  {name}: {count} orders")

if __name__ == "__main__":
    generate_mock_orders(num_orders=200, num_merchants=30)
