from prometheus_client import Counter, Histogram

# Total HTTP requests by method + path
HTTP_REQUESTS_TOTAL = Counter(
    "qjwt_http_requests_total",
    "Total HTTP requests to the qjwt service",
    ["method", "path"],
)

# Generic request latency by path
HTTP_REQUEST_LATENCY_SECONDS = Histogram(
    "qjwt_http_request_latency_seconds",
    "HTTP request latency (seconds) for the qjwt service",
    ["path"],
)

# Sign / verify specific latency
SIGN_LATENCY_SECONDS = Histogram(
    "qjwt_sign_latency_seconds",
    "JWT signing latency (seconds)",
    ["alg"],
)

VERIFY_LATENCY_SECONDS = Histogram(
    "qjwt_verify_latency_seconds",
    "JWT verification latency (seconds)",
)

# Errors by JWTError code
ERRORS_TOTAL = Counter(
    "qjwt_errors_total",
    "Total sign/verify errors by type",
    ["type"],
)
