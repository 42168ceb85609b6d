"""
Labels and thresholds shared by the derived-metrics services.
"""

# Zone labels assigned upstream by the district clustering job
ZONE_HEALTHY = "Healthy"
ZONE_FRAUD_RISK = "Fraud Risk"
ZONE_CAMP_TARGET = "Camp Target"
ZONE_GROWTH_STABLE = "Growth Stable"

# Zones that qualify a district for the risk watchlist on their own
RISK_ZONES = {ZONE_FRAUD_RISK, ZONE_CAMP_TARGET}

# Zones that need no intervention in the action queue
SETTLED_ZONES = {ZONE_HEALTHY, ZONE_GROWTH_STABLE}

# Biometric update intensity (percent) below which a district is at risk
LOW_BIO_RATIO_THRESHOLD = 10

# Severity labels
SEVERITY_CRITICAL = "CRITICAL"
SEVERITY_HIGH = "HIGH"
SEVERITY_REVIEW = "REVIEW"

# Risk entry types
RISK_TYPE_BIOMETRIC_ANOMALY = "Biometric Anomaly"
RISK_TYPE_INCLUSION_DEFICIT = "Inclusion Deficit"

# Anomaly type substrings that mark a record as critical (case-sensitive)
CRITICAL_ANOMALY_MARKERS = ("Critical", "Spike")
HIGH_PRIORITY_ANOMALY_MARKER = "High"

# Fallback anomaly types synthesized from the strategic matrix
FALLBACK_CRITICAL_TYPE = "Critical Anomaly"
FALLBACK_HIGH_TYPE = "High Priority Gap"

# ALI (Aadhaar inequality) tiers, strict lower bounds
ALI_EXCLUDED_THRESHOLD = 80
ALI_AT_RISK_THRESHOLD = 60
ALI_STATUS_EXCLUDED = "Structurally Excluded"
ALI_STATUS_AT_RISK = "At-Risk"
ALI_STATUS_STABLE = "Stable"
ALI_STATUSES = [ALI_STATUS_EXCLUDED, ALI_STATUS_AT_RISK, ALI_STATUS_STABLE]

ALI_COLORS = {
    ALI_STATUS_EXCLUDED: "#ef4444",
    ALI_STATUS_AT_RISK: "#f59e0b",
    ALI_STATUS_STABLE: "#10b981",
}

# Action queue labels
ACTION_LABEL_ANOMALY = "Anomaly Detected"
ACTION_LABEL_COVERAGE_GAP = "Coverage Gap"
ACTION_AUDIT = "Init Audit Protocol"
ACTION_MOBILE_UNIT = "Deploy Mobile Unit"

# Display placeholder for values that cannot be computed
NOT_AVAILABLE = "N/A"
