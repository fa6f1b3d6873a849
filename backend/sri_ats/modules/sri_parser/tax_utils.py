"""
Extracción de totales de impuestos de comprobantes SRI.

Las bases IVA se separan en tres grupos (0%, 12%, 14%/15%). Un código de
porcentaje IVA desconocido no suma a ninguna base pero su valor sí suma al
IVA total: las bases son informativas y el IVA debe cuadrar con el documento.
"""
from dataclasses import dataclass
from typing import Iterable

from sri_ats.config.sri_codes import (
    SRITaxType, IVA_ZERO_RATES, IVA_TWELVE_RATES, IVA_FIFTEEN_RATES
)
from sri_ats.models.sri_xml import TotalImpuesto
from sri_ats.modules.sri_parser.normalizers import parse_money_to_cents


@dataclass
class TaxTotals:
    iva0: int = 0
    iva12: int = 0
    iva15: int = 0
    iva_total: int = 0
    ice_total: int = 0
    irbpnr_total: int = 0


def extract_tax_totals(entries: Iterable[TotalImpuesto]) -> TaxTotals:
    totals = TaxTotals()

    for impuesto in entries:
        base = parse_money_to_cents(impuesto.base_imponible)
        valor = parse_money_to_cents(impuesto.valor)

        if impuesto.codigo == SRITaxType.IVA:
            totals.iva_total += valor
            if impuesto.codigo_porcentaje in IVA_ZERO_RATES:
                totals.iva0 += base
            elif impuesto.codigo_porcentaje in IVA_TWELVE_RATES:
                totals.iva12 += base
            elif impuesto.codigo_porcentaje in IVA_FIFTEEN_RATES:
                totals.iva15 += base
        elif impuesto.codigo == SRITaxType.ICE:
            totals.ice_total += valor
        elif impuesto.codigo == SRITaxType.IRBPNR:
            totals.irbpnr_total += valor

    return totals
