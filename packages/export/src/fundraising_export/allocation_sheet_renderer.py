"""Token allocation workbook renderer (one sheet per report)."""

from __future__ import annotations

import math
import re
from typing import Dict, List

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from fundraising_domain.blocks import AllocationBlock, BlockContext, BlockExecutor
from fundraising_domain.formatters import format_locale_date
from fundraising_domain.schemas import AllocationReport

# (header, DataFrame column, number format, width)
TABLE_COLUMNS = [
    ("Investor", "investor_name", None, 25),
    ("Email", "investor_email", None, 30),
    ("Wallet Address", "wallet_address", None, 44),
    ("Contribution (USD)", "contribution_amount", '$#,##0.00', 18),
    ("Token Amount", "token_amount", '#,##0.000000', 20),
    ("Percentage", "percentage", '0.0000', 12),
    ("Cliff (months)", "cliff_months", '0', 10),
    ("Vesting (months)", "vesting_months", '0', 10),
    ("TGE Unlock %", "tge_pct", '0.##', 10),
]

# Columns summed in the totals row
TOTALLED_COLUMNS = ("contribution_amount", "token_amount", "percentage")

INVALID_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")


class AllocationSheetRenderer:
    """Render allocation reports as a formatted workbook.

    Each report gets one sheet: a title, a metadata block (round, price,
    totals, vesting terms), then the per-investor table with a SUM totals
    row. Values come from ``AllocationBlock`` output, in report order.
    Non-finite amounts (zero token price, empty round) are left blank.
    """

    def __init__(self, reports: List[AllocationReport]):
        self.reports = reports

        self.bold_font = Font(bold=True)
        self.title_font = Font(size=14, bold=True)
        self.label_font = Font(italic=True)

        # Header styling
        self.header_font = Font(bold=True, color="FFFFFF")  # White text on dark blue
        self.header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")

        # Metadata block
        self.metadata_fill = PatternFill(start_color="F2F2F2", end_color="F2F2F2", fill_type="solid")

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        self.top_border = Border(top=Side(style='medium'))

        self.center_align = Alignment(horizontal='center', vertical='center', wrap_text=True)

        # Row of the table header per sheet title
        self.header_rows: Dict[str, int] = {}

    def render(self, output_path: str) -> str:
        wb = self.build_workbook()
        wb.save(output_path)
        return output_path

    def build_workbook(self) -> Workbook:
        wb = Workbook()
        wb.remove(wb.active)

        for report in self.reports:
            context = BlockContext()
            context.set("allocation_report", report)
            BlockExecutor([AllocationBlock()]).execute(context)

            self._render_report_sheet(
                wb,
                report,
                context.get("allocation_by_investor"),
                context.get("allocation_summary"),
            )

        return wb

    def _render_report_sheet(
        self,
        wb: Workbook,
        report: AllocationReport,
        by_investor: pd.DataFrame,
        summary: pd.DataFrame,
    ) -> None:
        # Excel sheet names: at most 31 characters, none of INVALID_TITLE_CHARS
        base_title = INVALID_TITLE_CHARS.sub("-", report.round_name or report.round_id)[:31]
        sheet_title = self._unique_title(wb, base_title)
        sheet = wb.create_sheet(title=sheet_title)
        sheet.sheet_view.showGridLines = False

        title_cell = sheet["A1"]
        title_cell.value = f"Token Allocation - {report.round_name}"
        title_cell.font = self.title_font

        row = self._render_metadata(sheet, report, summary.iloc[0], start_row=3)

        header_row = row + 1
        self.header_rows[sheet_title] = header_row
        for col_idx, (header, _, _, width) in enumerate(TABLE_COLUMNS, start=1):
            cell = sheet.cell(row=header_row, column=col_idx, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_align
            cell.border = self.thin_border
            sheet.column_dimensions[self._col_letter(col_idx)].width = width

        sheet.freeze_panes = f"B{header_row + 1}"

        row = header_row + 1
        for record in by_investor.to_dict("records"):
            for col_idx, (_, column, number_format, _) in enumerate(TABLE_COLUMNS, start=1):
                cell = sheet.cell(row=row, column=col_idx, value=self._cell_value(record[column]))
                if number_format:
                    cell.number_format = number_format
            row += 1

        self._render_totals(sheet, header_row, row)

    def _render_metadata(self, sheet, report: AllocationReport, summary: pd.Series, start_row: int) -> int:
        """Write label/value pairs; returns the first free row after them."""
        vesting = report.vesting_schedule
        vesting_text = (
            f"{vesting.cliff}m cliff, {vesting.duration}m vesting, {vesting.tge:g}% at TGE"
            if vesting
            else "None"
        )

        items = [
            ("Round", report.round_name, None),
            ("Round ID", report.round_id, None),
            ("Token Price", self._cell_value(report.token_price), '$0.00####'),
            ("Total Raised", self._cell_value(report.total_raised), '$#,##0.00'),
            ("Total Tokens", self._cell_value(report.total_tokens), '#,##0.000000'),
            ("Investors", int(summary["investor_count"]), '0'),
            ("Wallets Provided", int(summary["wallets_provided"]), '0'),
            ("Vesting", vesting_text, None),
            ("Generated", format_locale_date(report.generated_at), None),
        ]

        row = start_row
        for label, value, number_format in items:
            label_cell = sheet.cell(row=row, column=1, value=label)
            label_cell.font = self.label_font
            label_cell.fill = self.metadata_fill

            value_cell = sheet.cell(row=row, column=2, value=value)
            value_cell.fill = self.metadata_fill
            if number_format:
                value_cell.number_format = number_format
            row += 1

        return row

    def _render_totals(self, sheet, header_row: int, totals_row: int) -> None:
        first_data_row = header_row + 1
        last_data_row = totals_row - 1

        label_cell = sheet.cell(row=totals_row, column=1, value="Total")
        label_cell.font = self.bold_font
        label_cell.border = self.top_border

        for col_idx, (_, column, number_format, _) in enumerate(TABLE_COLUMNS, start=1):
            if column not in TOTALLED_COLUMNS:
                continue
            letter = self._col_letter(col_idx)
            value = (
                f"=SUM({letter}{first_data_row}:{letter}{last_data_row})"
                if last_data_row >= first_data_row
                else 0
            )
            cell = sheet.cell(row=totals_row, column=col_idx, value=value)
            cell.font = self.bold_font
            cell.border = self.top_border
            cell.number_format = number_format

    @staticmethod
    def _cell_value(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    @staticmethod
    def _unique_title(wb: Workbook, title: str) -> str:
        candidate = title
        suffix = 2
        while candidate in wb.sheetnames:
            tail = f" ({suffix})"
            candidate = title[:31 - len(tail)] + tail
            suffix += 1
        return candidate

    @staticmethod
    def _col_letter(idx: int) -> str:
        """Convert 1-based column index to Excel column letter."""
        letter = ""
        while idx > 0:
            idx, rem = divmod(idx - 1, 26)
            letter = chr(65 + rem) + letter
        return letter


__all__ = ["AllocationSheetRenderer"]
