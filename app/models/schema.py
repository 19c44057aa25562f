from pydantic import BaseModel, ConfigDict, Field


class StampLayout(BaseModel):
    qr_size: float = 100
    qr_margin: float = 20
    label_x: float = 20
    label_y: float = 20
    font_name: str = "Helvetica"
    font_size: float = 12
    label_prefix: str = "Plan-ID: "


class StampedDocument(BaseModel):
    marker_id: str
    pdf_bytes: bytes
    page_count: int


class StoredDocument(BaseModel):
    key: str
    location: str
    remote: bool


class ProcessResult(BaseModel):
    marker_id: str
    qr_payload: str
    page_count: int
    stored: StoredDocument


class RemoteProcessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    marker_id: str = Field(alias="markerId")
    public_pdf_url: str = Field(alias="publicPdfUrl")


class LocalProcessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    marker_id: str = Field(alias="markerId")
    final_pdf_path: str = Field(alias="finalPdfPath")
