"""
FY Classifier Utility

Утилита для раскладки файлов из плоского каталога по каталогам финансовых лет (<FY>FY).
"""

__version__ = "1.0.0"
__author__ = "FY Classifier Team"
__description__ = "Utility for sorting dated files into financial year directories"
