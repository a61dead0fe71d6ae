"""
Reference lists shared by validation and statistics.

Currency codes are kept sorted for consistent display.
"""

CURRENCY_NAMES: dict[str, str] = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "HKD": "Hong Kong Dollar",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "SGD": "Singapore Dollar",
    "NZD": "New Zealand Dollar",
    "INR": "Indian Rupee",
    "KRW": "South Korean Won",
    "MXN": "Mexican Peso",
    "BRL": "Brazilian Real",
    "ZAR": "South African Rand",
    "RUB": "Russian Ruble",
    "SEK": "Swedish Krona",
    "NOK": "Norwegian Krone",
    "DKK": "Danish Krone",
}

CURRENCIES: list[str] = sorted(CURRENCY_NAMES)

DISTANCE_UNITS: list[str] = ["km", "miles"]

VOLUME_UNITS: list[str] = ["liters", "gallons", "gallons (US)", "gallons (UK)"]

TYRE_PRESSURE_UNITS: list[str] = ["bar", "PSI", "kPa"]

PAYMENT_TYPES: list[str] = ["Cash", "Credit Card", "Mobile App", "Other"]

VEHICLE_TYPES: list[str] = [
    "Car/Truck",
    "Motorcycle",
    "Heavy Truck",
    "ATV & UTV",
    "Snowmobile",
    "Personal Watercraft",
    "Other",
]

FUEL_TYPES: list[str] = [
    "Regular Gasoline",
    "Premium Gasoline",
    "Super Premium Gasoline",
    "Diesel",
    "Premium Diesel",
    "Bio Diesel",
    "E85 Ethanol",
    "E10 Ethanol",
    "CNG (Compressed Natural Gas)",
    "LPG (Liquefied Petroleum Gas)",
    "Electric",
    "Hydrogen",
    "Aviation Fuel",
    "Marine Fuel",
    "Racing Fuel",
    "Other",
]

MAINTENANCE_CATEGORIES: list[str] = [
    "Oil Change",
    "Tire Replacement",
    "Brake Service",
    "Battery Replacement",
    "Engine Repair",
    "Transmission Service",
    "Suspension Repair",
    "Air Conditioning Service",
    "Inspection Fee",
    "Vehicle Registration",
    "Insurance Premium",
]

EMERGENCY_CATEGORIES: list[str] = [
    "Emergency Repair",
    "Roadside Emergency",
    "After Hours Service",
    "Holiday Surcharge",
    "Expedited Service",
    "Rush Delivery",
    "Emergency Towing",
    "Emergency Parts",
    "Temporary Transportation",
]
