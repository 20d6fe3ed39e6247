import csv
import logging
import os
import time

from dispatch.batch import BatchScheduler
from dispatch.engine import AssignmentEngine
from dispatch.policy import policy_from_env
from drivers.directory import InMemoryDriverDirectory
from drivers.loader import load_driver_profiles
from orders.fare import calculate_delivery_fare
from orders.loader import load_orders
from orders.store import InMemoryOrderStore
from routing.geo import distance_between, estimate_travel_minutes
from routing.zones import BoundingBoxZoneResolver, ZoneBox

# Coarse zones around the Hyderabad centre used by the mock data generators.
SIMULATION_ZONES = [
    ZoneBox("central", 17.36, 78.46, 17.41, 78.51),
    ZoneBox("north", 17.41, 78.41, 17.47, 78.57),
    ZoneBox("south", 17.30, 78.41, 17.36, 78.57),
    ZoneBox("east", 17.36, 78.51, 17.41, 78.57),
    ZoneBox("west", 17.36, 78.41, 17.41, 78.46),
]

def run_simulation(drivers_path="mock_drivers_100.csv", orders_path="raw_orders_generated.csv", limit=50):
    print("=== STARTING BATCH ASSIGNMENT SIMULATION ===")

    # 1. Load Data
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    drivers = load_driver_profiles(os.path.join(base_dir, drivers_path))
    orders = load_orders(os.path.join(base_dir, orders_path))[:limit]
    print(f"Loaded {len(orders)} Orders and {len(drivers)} Drivers.\n")

    # 2. Configure System
    policy = policy_from_env()
    store = InMemoryOrderStore()
    engine = AssignmentEngine(
        InMemoryDriverDirectory(drivers),
        store,
        zone_resolver=BoundingBoxZoneResolver(SIMULATION_ZONES),
        policy=policy,
    )
    scheduler = BatchScheduler(engine)

    # 3. Run the batch
    start_time = time.time()
    results = scheduler.assign_batch(orders)
    print(f"Assigned batch in {time.time() - start_time:.2f}s.\n")

    # 4. Report
    orders_by_id = {order.order_id: order for order in orders}
    output_path = os.path.join(base_dir, "assignment_results.csv")

    with open(output_path, "w", newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["order_id", "priority", "driver_id", "final_score", "pickup_km", "pickup_minutes", "fare", "failure_reason"])

        for order_id, result in results.items():
            order = orders_by_id[order_id]
            if not result.success:
                writer.writerow([order_id, order.priority.value, "FAILED", "", "", "", "", result.failure_reason])
                print(f"[FAILED] Order {order_id} ({order.priority.value}) -> {result.failure_reason}")
                continue

            trip_km = distance_between(order.pickup, order.dropoff)
            fare = calculate_delivery_fare(trip_km, estimate_travel_minutes(trip_km, policy.traffic_factor))
            score = result.score
            writer.writerow([
                order_id,
                order.priority.value,
                result.assigned_driver_id,
                round(score.final_score, 3),
                round(score.estimated_distance_km, 2),
                score.estimated_minutes,
                fare.total_fare,
                "",
            ])
            print(f"[SUCCESS] Order {order_id} ({order.priority.value}) -> {result.assigned_driver_id} "
                  f"(score {score.final_score:.2f}, {score.estimated_minutes} min away)")

    successful = sum(1 for result in results.values() if result.success)
    print("\n=== SIMULATION COMPLETE ===")
    print(f"Orders Assigned: {successful} / {len(results)}")
    print(f"Active deliveries in store: {store.stats().active_deliveries}")
    print(f"Results written to '{output_path}'.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_simulation()
