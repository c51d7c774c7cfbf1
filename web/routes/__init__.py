"""
API routes

Router modules per feature:
- health: health check
- billing: wholesale / regular bills, stock lines, sales
- gst: GST tax invoices
- ledger: customer silver / labor ledger
- bullion: bullion dealer ledger
- payroll: employee salary and baki
"""
