# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    record_mint,
    record_pin_upload,
    record_rejection,
    record_sale,
    update_for_sale_gauge,
)
