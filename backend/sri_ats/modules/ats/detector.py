"""
Clasificación de comprobantes en compras y ventas respecto a un RUC
contribuyente.
"""
import logging
from typing import Dict, List, Optional, Tuple

from sri_ats.models.ats import ClassifiedDocument
from sri_ats.models.sri_document import NormalizedDocument
from sri_ats.modules.ats.constants import RUC_REGEX, TransactionTypes

logger = logging.getLogger(__name__)


def detect_transaction_type(document: NormalizedDocument, contribuyente_ruc: str) -> str:
    """
    emisor == contribuyente -> venta; receptor == contribuyente -> compra.
    Si no coincide ninguno se asume compra (caso habitual: facturas de proveedores).
    """
    if document.emisor.ruc == contribuyente_ruc:
        return TransactionTypes.VENTA
    if document.receptor.identificacion == contribuyente_ruc:
        return TransactionTypes.COMPRA
    return TransactionTypes.COMPRA


def infer_contribuyente_ruc(documents: List[NormalizedDocument]) -> Optional[str]:
    """
    Infiere el RUC del contribuyente a partir del lote.

    1. Si todos los documentos tienen el mismo emisor, son ventas de ese emisor.
    2. Si no, el receptor más frecuente con RUC válido (13 dígitos); en caso
       de empate gana el que aparece primero en el lote.
    """
    if not documents:
        return None

    emisores: Dict[str, int] = {}
    receptores: Dict[str, int] = {}
    for doc in documents:
        emisores[doc.emisor.ruc] = emisores.get(doc.emisor.ruc, 0) + 1
        receptor_id = doc.receptor.identificacion
        receptores[receptor_id] = receptores.get(receptor_id, 0) + 1

    if len(emisores) == 1:
        return next(iter(emisores))

    inferred = None
    max_count = 0
    for ruc, count in receptores.items():
        if RUC_REGEX.fullmatch(ruc) and count > max_count:
            inferred = ruc
            max_count = count
    return inferred


def classify_documents(
    documents: List[NormalizedDocument],
    contribuyente_ruc: Optional[str] = None,
) -> List[ClassifiedDocument]:
    ruc = contribuyente_ruc if contribuyente_ruc is not None else infer_contribuyente_ruc(documents)

    if not ruc:
        logger.info("No se pudo determinar el RUC del contribuyente; todos los documentos se tratan como compras")
        return [
            ClassifiedDocument(document=doc, transaction_type=TransactionTypes.COMPRA)
            for doc in documents
        ]

    return [
        ClassifiedDocument(document=doc, transaction_type=detect_transaction_type(doc, ruc))
        for doc in documents
    ]


def separate_by_transaction_type(
    classified: List[ClassifiedDocument],
) -> Tuple[List[NormalizedDocument], List[NormalizedDocument]]:
    """Devuelve (compras, ventas) preservando el orden de entrada."""
    compras: List[NormalizedDocument] = []
    ventas: List[NormalizedDocument] = []
    for item in classified:
        if item.transaction_type == TransactionTypes.COMPRA:
            compras.append(item.document)
        else:
            ventas.append(item.document)
    return compras, ventas
