"""
donegraph：將帶有完成度的工作項目依賴圖渲染為圖片。
"""

__version__ = "0.1.0"
