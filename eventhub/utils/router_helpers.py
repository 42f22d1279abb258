from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from typing import Callable, Any
from functools import wraps
import logging
from sqlalchemy.exc import SQLAlchemyError
from ..errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PaymentFailedError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from .constants import ResponseMessages

logger = logging.getLogger(__name__)


def handle_service_errors(func: Callable) -> Callable:
    """Decorator to standardize service error handling in routers"""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        # Bad credentials -> 401 Unauthorized
        except AuthenticationError as e:
            logger.warning(f"Authentication failed: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(e),
                headers={"WWW-Authenticate": "Bearer"},
            )

        # Permission/Access Errors -> 403 Forbidden
        except PermissionDeniedError as e:
            logger.warning(f"Permission denied: {str(e)}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

        except NotFoundError as e:
            logger.warning(f"Resource not found: {str(e)}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        # Invalid state transitions -> 400 Bad Request
        except ConflictError as e:
            logger.warning(f"Conflict: {str(e)}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        # Validation and duplicate errors -> 400 Bad Request
        except ValidationError as e:
            logger.warning(f"Validation error: {str(e)}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        # Declined bank transfer -> 402 Payment Required
        except PaymentFailedError as e:
            logger.warning(f"Payment failed: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_402_PAYMENT_REQUIRED, detail=str(e)
            )

        # Storage failures -> 503 Service Unavailable
        except (StorageError, SQLAlchemyError) as e:
            logger.error(f"Storage error in {func.__name__}: {str(e)}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=ResponseMessages.STORAGE_UNAVAILABLE,
            )

        # Unexpected errors -> 500 Internal Server Error
        except Exception as e:
            logger.error(
                f"Unexpected error in {func.__name__}: {str(e)}", exc_info=True
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=ResponseMessages.UNEXPECTED_ERROR,
            )

    return wrapper


class RouterResponse:
    """Helper class for creating standardized API responses"""

    @staticmethod
    def _encode(data: Any) -> Any:
        # Schemas go out with their camelCase aliases
        return jsonable_encoder(data, by_alias=True)

    @staticmethod
    def success(data: Any = None, message: str = ResponseMessages.SUCCESS) -> dict:
        """Create success response"""
        response = {"success": True, "message": message}
        if data is not None:
            response["data"] = RouterResponse._encode(data)
        return response

    @staticmethod
    def created(data: Any, message: str = ResponseMessages.CREATED) -> dict:
        """Create resource creation response"""
        return {"success": True, "message": message, "data": RouterResponse._encode(data)}

    @staticmethod
    def updated(data: Any = None, message: str = ResponseMessages.UPDATED) -> dict:
        """Create resource update response"""
        return RouterResponse.success(data, message)

    @staticmethod
    def deleted(message: str = ResponseMessages.DELETED) -> dict:
        """Create resource deletion response"""
        return {"success": True, "message": message}

    @staticmethod
    def error(message: str, details: Any = None) -> dict:
        """Create error response"""
        response = {"success": False, "message": message}
        if details is not None:
            response["details"] = details
        return response
