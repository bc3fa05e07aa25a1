HTTP_STATUS_CODES = {
    "OK": 200,
    "CREATED": 201,
    "NO_CONTENT": 204,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "VALIDATION_ERROR": 422,
    "TOO_MANY_REQUESTS": 429,
    "INTERNAL_SERVER_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}

ERROR_MESSAGES = {
    "VALIDATION_FAILED": "Validation failed. Please check your inputs.",
    "UNAUTHORIZED_ACCESS": "You are not authorized to access this resource.",
    "RESOURCE_NOT_FOUND": "The requested resource could not be found.",
    "DUPLICATE_RESOURCE": "The resource already exists.",
    "SERVER_ERROR": "An unexpected error occurred. Please try again later.",
}

AUTHENTICATION_MESSAGES = {
    "AUTHENTICATION_REQUIRED": "Authentication Required",
    "TOKEN_EXPIRED": "Token expired",
    "INVALID_TOKEN": "Invalid token",
    "INVALID_CREDENTIALS": "Invalid email or password",
    "ADMIN_REQUIRED": "Administrator access required",
}

ROLES = {
    "ADMIN": "admin",
    "USER": "user",
}

# MongoDB collection names
COLLECTIONS = {
    "PLANS": "planos",
    "USERS": "usuarios",
    "STORES": "lojas",
    "FLYERS": "panfletos",
    "PRODUCTS": "produtos",
    "COUPONS": "cupons",
    "INTEGRATIONS": "integracoes",
    "NOTIFICATIONS": "notificacoes",
    "RESOURCE_COUNTERS": "resource_counters",
}
