import pytest

from orders.fare import FareTariff, calculate_delivery_fare


def test_fare_without_surge():
    fare = calculate_delivery_fare(distance_km=6, estimated_minutes=20, surge_multiplier=1.0)

    assert fare.base_fare == 20
    assert fare.distance_fare == 48
    assert fare.time_fare == 20
    assert fare.surge_fare == 0
    assert fare.total_fare == 88


def test_fare_rounds_components_up():
    fare = calculate_delivery_fare(2.3, 7.2)
    # ceil(18.4) = 19, ceil(7.2) = 8
    assert (fare.distance_fare, fare.time_fare) == (19, 8)
    assert fare.total_fare == 20 + 19 + 8


def test_surge_is_charged_on_subtotal():
    fare = calculate_delivery_fare(6, 20, surge_multiplier=1.5)
    assert fare.surge_fare == 44
    assert fare.total_fare == 132


def test_custom_tariff():
    fare = calculate_delivery_fare(3, 10, tariff=FareTariff(base_fare=30, per_km_rate=10, per_minute_rate=2))
    assert fare.total_fare == 30 + 30 + 20


def test_discount_surge_rejected():
    with pytest.raises(ValueError):
        calculate_delivery_fare(6, 20, surge_multiplier=0.8)
