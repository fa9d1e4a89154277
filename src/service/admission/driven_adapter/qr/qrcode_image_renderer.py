from base64 import b64encode
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from src.service.admission.app.interface.i_qr_image_renderer import IQrImageRenderer


class QrcodeImageRenderer(IQrImageRenderer):
    """PNG QR codes through the qrcode/Pillow stack."""

    def __init__(self, *, box_size: int = 10, border: int = 2) -> None:
        self.box_size = box_size
        self.border = border

    def render_data_url(self, data: str) -> str:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color='black', back_color='white')
        buffer = BytesIO()
        img.save(buffer, format='PNG')
        return f'data:image/png;base64,{b64encode(buffer.getvalue()).decode("ascii")}'
