"""
Excel Inventory Report Service
Creates .xlsx files with the stock summary, product list and movement log
"""
from __future__ import annotations
from datetime import date, datetime
from io import BytesIO
from typing import List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from stockbook.models.inventory import BestSeller, DashboardStats, Product, StockMovement


class InventoryExcelService:
    """Service for generating Excel inventory reports"""

    # Color scheme
    HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    HEADER_FONT = Font(bold=True, color="FFFFFF", size=12)
    SUMMARY_FILL = PatternFill(start_color="D9E8F5", end_color="D9E8F5", fill_type="solid")
    ALERT_FILL = PatternFill(start_color="F8CBAD", end_color="F8CBAD", fill_type="solid")

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    PRODUCT_HEADERS = ["SKU", "Name", "Category", "Supplier", "Barcode", "Stock",
                       "Low Stock At", "Cost", "Price", "Stock Value", "Expiry"]
    MOVEMENT_HEADERS = ["Date", "Type", "Product", "Quantity", "Balance After", "User", "Reason"]

    @staticmethod
    def generate_filename(day: date) -> str:
        return f"inventory_report_{day.strftime('%Y-%m-%d')}.xlsx"

    @staticmethod
    def create_report(
        products: Sequence[Product],
        movements: Sequence[StockMovement],
        stats: DashboardStats,
        best_sellers: Optional[List[BestSeller]] = None,
    ) -> bytes:
        """
        Create Excel workbook from the current collections.

        Returns:
            Excel file as bytes
        """
        wb = Workbook()

        # Remove default sheet
        if 'Sheet' in wb.sheetnames:
            wb.remove(wb['Sheet'])

        InventoryExcelService._create_summary_sheet(wb, stats, best_sellers or [])
        InventoryExcelService._create_products_sheet(wb, products)
        InventoryExcelService._create_movements_sheet(wb, movements)

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output.getvalue()

    @staticmethod
    def _write_header(ws, headers):
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = InventoryExcelService.HEADER_FONT
            cell.fill = InventoryExcelService.HEADER_FILL
            cell.border = InventoryExcelService.BORDER
            cell.alignment = Alignment(horizontal='center', vertical='center')
        ws.row_dimensions[1].height = 20

    @staticmethod
    def _create_summary_sheet(wb: Workbook, stats: DashboardStats, best_sellers: List[BestSeller]):
        """Create summary sheet with KPIs"""
        ws = wb.create_sheet("Summary", 0)

        ws['A1'] = "INVENTORY REPORT"
        ws['A1'].font = Font(bold=True, size=14, color="FFFFFF")
        ws['A1'].fill = PatternFill(start_color="203864", end_color="203864", fill_type="solid")
        ws.merge_cells('A1:B1')
        ws['A1'].alignment = Alignment(horizontal='center', vertical='center')
        ws.row_dimensions[1].height = 25

        ws['A3'] = "Generated:"
        ws['B3'] = datetime.now().strftime('%Y-%m-%d %H:%M')
        ws['A3'].font = Font(bold=True)

        row = 5
        metrics = [
            ("Units In Stock", stats.total_products),
            ("Low Stock Items", stats.low_stock_count),
            ("Expired Items", stats.expired_count),
            ("Stock Value (cost)", stats.total_value),
            ("Movements Today", stats.movements_today),
        ]
        for label, value in metrics:
            ws[f'A{row}'] = label
            ws[f'B{row}'] = value
            ws[f'A{row}'].font = Font(bold=True)
            ws[f'A{row}'].fill = InventoryExcelService.SUMMARY_FILL
            ws[f'B{row}'].fill = InventoryExcelService.SUMMARY_FILL
            row += 1

        row += 1
        ws[f'A{row}'] = "Best Sellers"
        ws[f'A{row}'].font = Font(bold=True, size=11)
        row += 1
        for col, header in zip(['A', 'B'], ["Product", "Units Sold"]):
            ws[f'{col}{row}'] = header
            ws[f'{col}{row}'].font = InventoryExcelService.HEADER_FONT
            ws[f'{col}{row}'].fill = InventoryExcelService.HEADER_FILL
            ws[f'{col}{row}'].border = InventoryExcelService.BORDER
        row += 1
        for seller in best_sellers:
            ws[f'A{row}'] = seller.name
            ws[f'B{row}'] = seller.qty
            row += 1

        ws.column_dimensions['A'].width = 30
        ws.column_dimensions['B'].width = 20

    @staticmethod
    def _create_products_sheet(wb: Workbook, products: Sequence[Product]):
        ws = wb.create_sheet("Products", 1)
        InventoryExcelService._write_header(ws, InventoryExcelService.PRODUCT_HEADERS)

        row = 2
        for p in products:
            values = [
                p.sku, p.name, p.category, p.supplier, p.barcode, p.stock,
                p.low_stock_threshold, p.cost_price, p.sell_price, p.stock * p.cost_price,
                datetime.fromtimestamp(p.expiry_date / 1000).date() if p.expiry_date is not None else None,
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = InventoryExcelService.BORDER
            ws.cell(row=row, column=11).number_format = 'yyyy-mm-dd'
            for col in (8, 9, 10):
                ws.cell(row=row, column=col).number_format = '#,##0.00'
            if p.is_low_stock:
                ws.cell(row=row, column=6).fill = InventoryExcelService.ALERT_FILL
            row += 1

        for col in range(1, len(InventoryExcelService.PRODUCT_HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 16
        ws.column_dimensions['B'].width = 30

    @staticmethod
    def _create_movements_sheet(wb: Workbook, movements: Sequence[StockMovement]):
        ws = wb.create_sheet("Movements", 2)
        InventoryExcelService._write_header(ws, InventoryExcelService.MOVEMENT_HEADERS)

        row = 2
        for m in movements:
            values = [
                datetime.fromtimestamp(m.timestamp / 1000), m.type.value, m.product_name,
                m.quantity, m.balance_after, m.user_id, m.reason,
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = InventoryExcelService.BORDER
            ws.cell(row=row, column=1).number_format = 'yyyy-mm-dd hh:mm'
            row += 1

        ws.column_dimensions['A'].width = 18
        ws.column_dimensions['B'].width = 8
        ws.column_dimensions['C'].width = 30
        ws.column_dimensions['D'].width = 10
        ws.column_dimensions['E'].width = 14
        ws.column_dimensions['F'].width = 10
        ws.column_dimensions['G'].width = 24
