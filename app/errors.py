class SubmissionError(Exception):
    """Base for every failure reported to the caller as ``{"error": reason}``."""

    status_code = 400

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UploadRejected(SubmissionError):
    def __init__(self, reason: str = "Only images are allowed"):
        super().__init__(reason)


class ServerError(SubmissionError):
    # Ayrıntılar loglanır, istemciye sadece genel mesaj döner
    status_code = 500

    def __init__(self):
        super().__init__("Server error")
