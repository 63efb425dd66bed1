"""功能模块"""
