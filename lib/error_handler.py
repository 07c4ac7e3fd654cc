from typing import Optional
import logging

logger = logging.getLogger(__name__)

class AppError(Exception):
    def __init__(self, message: str, status_code: int = 500, user_message: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.user_message = user_message or "An error occurred. Please try again later."
        super().__init__(self.message)

class FileResolutionError(AppError):
    """Telegram getFile did not return a usable file path"""
    def __init__(self, message: str):
        super().__init__(message, status_code=502,
                         user_message="Could not retrieve your voice message.")

class FileDownloadError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status_code=502,
                         user_message="Could not retrieve your voice message.")

class TranscriptionError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status_code=502,
                         user_message="Sorry, I couldn't transcribe your voice message. Please try again.")

class CompletionError(AppError):
    pass

class JsonParseError(AppError):
    """Completion output was not a JSON object. Recovered with a fallback record."""
    pass

class StoreWriteError(AppError):
    pass

class GenericProcessingError(AppError):
    pass

class ErrorHandler:
    @staticmethod
    def handle_voice_error(error: Exception) -> str:
        logger.error(f"Voice message error: {str(error)}", exc_info=error)
        if isinstance(error, AppError):
            return error.user_message
        return "Sorry, I couldn't process your voice message. Please try again."

    @staticmethod
    def handle_processing_error(error: Exception) -> str:
        logger.error(f"Idea processing error: {str(error)}", exc_info=error)
        return "Something went wrong while processing your idea. Please try again later."
