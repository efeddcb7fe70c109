"""앱 전역 커스텀 예외 클래스.

AppException을 상속하면 전역 핸들러(error_handlers.py)가 자동으로
{"error_code": "...", "message": "..."} 형식의 JSON 응답을 생성한다.
"""


class AppException(Exception):
    """앱 전역 베이스 예외.

    서브클래스에서 status_code, error_code, message를 클래스 변수로 정의하면
    전역 핸들러가 해당 값을 읽어 HTTP 응답을 생성한다.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


# --- 요청 검증 ---


class InvalidImage(AppException):
    status_code = 400
    error_code = "INVALID_IMAGE"
    message = "Original image is required"


class InvalidStyle(AppException):
    status_code = 400
    error_code = "INVALID_STYLE"
    message = "Unknown art style"


class InvalidMood(AppException):
    status_code = 400
    error_code = "INVALID_MOOD"
    message = "Unknown mood preset"


class InvalidCategory(AppException):
    status_code = 400
    error_code = "INVALID_CATEGORY"
    message = "Unknown category"


class InvalidPurchaseOption(AppException):
    status_code = 400
    error_code = "INVALID_PURCHASE_OPTION"
    message = "Unsupported product type or size"


# --- 인증 관련 ---


class NotAuthenticated(AppException):
    status_code = 401
    error_code = "UNAUTHORIZED"
    message = "Unauthorized"


class InvalidCredentials(AppException):
    status_code = 401
    error_code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class InvalidToken(AppException):
    status_code = 401
    error_code = "INVALID_TOKEN"
    message = "Invalid or expired token"


class OAuthFailed(AppException):
    status_code = 400
    error_code = "OAUTH_FAILED"
    message = "Google sign-in failed"


# --- 크레딧 ---


class InsufficientCredits(AppException):
    status_code = 403
    error_code = "INSUFFICIENT_CREDITS"
    message = "Not enough credits"


# --- 변환 관련 ---


class TransformationNotFound(AppException):
    status_code = 404
    error_code = "TRANSFORMATION_NOT_FOUND"
    message = "Transformation not found"


class ImageNotReady(AppException):
    status_code = 404
    error_code = "IMAGE_NOT_READY"
    message = "Transformed image is not available yet"


class InvalidStatusTransition(AppException):
    status_code = 409
    error_code = "INVALID_STATUS_TRANSITION"
    message = "Transformation status cannot move backwards"


class GenerationFailed(AppException):
    status_code = 502
    error_code = "UPSTREAM_ERROR"
    message = "No image generated from Gemini API"


# --- 커머스 (Medusa) ---


class ProductNotFound(AppException):
    status_code = 404
    error_code = "PRODUCT_NOT_FOUND"
    message = "Product not found"


class VariantNotFound(AppException):
    status_code = 404
    error_code = "VARIANT_NOT_FOUND"
    message = "Variant not found"


class CheckoutFailed(AppException):
    status_code = 502
    error_code = "CHECKOUT_FAILED"
    message = "Failed to create checkout"


class UpstreamError(AppException):
    status_code = 502
    error_code = "UPSTREAM_ERROR"
    message = "External service request failed"


# --- 설정 ---


class ServiceUnavailable(AppException):
    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"
    message = "Service is not configured"
