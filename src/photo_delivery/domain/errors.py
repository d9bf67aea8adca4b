"""Delivery error taxonomy."""


class DeliveryError(RuntimeError):
    """Base class for delivery pipeline failures."""


class NotFoundError(DeliveryError):
    """No recipient row matched, or the model folder holds no assets."""


class EmptySourceError(DeliveryError):
    """The recipient spreadsheet returned no rows."""


class SourceUnavailableError(DeliveryError):
    """The recipient spreadsheet could not be read."""


class AlreadyDeliveredError(DeliveryError):
    """The model already has a registered delivery folder."""


class UploadError(DeliveryError):
    """Folder creation, alias registration or a file upload failed."""


class SendError(DeliveryError):
    """The email provider rejected or failed the send."""


class RecordError(DeliveryError):
    """Writing the spreadsheet status or the delivery log failed."""


class LedgerError(DeliveryError):
    """Reading or writing the alias ledger failed."""
