"""商品模块"""
