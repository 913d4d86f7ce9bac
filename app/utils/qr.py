import io

import qrcode


def ticket_qr_png(ticket_id: str) -> bytes:
    """Render a ticket id as a PNG QR code."""
    image = qrcode.make(ticket_id)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
