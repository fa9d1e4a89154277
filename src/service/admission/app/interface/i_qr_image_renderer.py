from abc import ABC, abstractmethod


class IQrImageRenderer(ABC):
    @abstractmethod
    def render_data_url(self, data: str) -> str:
        """Render data as a QR code and return it as a data:image/png;base64 URL"""
        pass
