from .daily import BrowseCursor, EmptyBankError, daily_index, daily_question, day_of_year

__all__ = ["BrowseCursor", "EmptyBankError", "daily_index", "daily_question", "day_of_year"]
