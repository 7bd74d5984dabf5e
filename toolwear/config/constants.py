"""
Fixed domain constants.

The wear thresholds are part of the tool classification rule and are not
configurable per deployment. Changing them changes the meaning of every
stored condition, so edit here and restart the service.
"""

# Percentage of useful life consumed at which a tool enters each condition.
# Boundaries belong to the upper bracket (70% is WARN, 80% is REPLACE).
WARN_PERCENT = 70
REPLACE_PERCENT = 80

# Display labels used on the shop-floor dashboard
CONDITION_LABELS = {
    "OK": "OK",
    "WARN": "Atenção!",
    "REPLACE": "Trocar Ferramenta (TF)",
}

# Text formats exchanged with the display layer
DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"
MONTH_FORMAT = "%m/%Y"
