# backend/utils/chatbot.py
"""Canned-response shopping assistant.

``respond`` lower-cases the message, walks the keyword rules in priority
order and picks a random reply from the first category with a keyword
contained in the text. Tables are immutable and can be swapped per call.
"""
import random
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

RESPONSES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "greeting": (
        "Hello! Welcome to our store! How can I help you today?",
        "Hi there! I'm here to help you find the perfect products. What are you looking for?",
        "Welcome! I can help you with product recommendations, order status, or any questions you have.",
    ),
    "products": (
        "We have products in Electronics, Clothing, Books, Home & Garden, Sports, Toys, Beauty, and Food!",
        "What type of product are you interested in? I can help you find the best options.",
        "Browse the categories on the home screen or use the filters to narrow things down.",
    ),
    "electronics": (
        "Our electronics section includes headphones, smart watches, laptop accessories and more.",
        "Looking for a specific device? Try the Electronics category and sort by rating.",
    ),
    "clothing": (
        "Our clothing collection includes T-shirts, jeans, jackets and more.",
        "We have stylish and comfortable clothing for all occasions. What style are you looking for?",
    ),
    "books": (
        "Our book collection covers programming, technology, and learning resources.",
        "Check the Books category for guides from beginner to advanced level.",
    ),
    "cart": (
        "You can add items to your cart with the 'Add to Cart' button on any product page.",
        "To view your cart, tap the cart icon in the bottom navigation bar.",
        "Your cart shows all selected items with quantities and the total price.",
    ),
    "order": (
        "To place an order, add items to your cart and proceed to checkout.",
        "You can track your orders in the Profile section under Order History.",
        "Orders are usually delivered within 7 days.",
    ),
    "help": (
        "I can help you with:\n- Product recommendations\n- Order status\n- Cart assistance\n"
        "- General questions\n\nWhat would you like to know?",
    ),
    "default": (
        "I'm not sure I understand. Could you rephrase that?",
        "I can help you with product information, orders, or general questions. What do you need?",
        "Let me know if you need help finding products, checking orders, or have any other questions!",
    ),
})

# (category, keywords) in priority order; first match wins
KEYWORD_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("greeting", ("hello", "hi", "hey")),
    ("products", ("product", "item", "buy")),
    ("electronics", ("electronic", "phone", "laptop", "computer")),
    ("clothing", ("cloth", "shirt", "dress", "jeans")),
    ("books", ("book", "read", "programming")),
    ("cart", ("cart",)),
    ("order", ("order", "purchase")),
    ("help", ("help", "support")),
)

FALLBACK = "default"

SUGGESTIONS: Tuple[str, ...] = (
    "What products do you have?",
    "Help me find electronics",
    "How do I add items to cart?",
    "What's my order status?",
    "Tell me about your clothing",
    "Show me books",
    "How can I track my order?",
)


def match_category(
    text: str,
    rules: Sequence[Tuple[str, Sequence[str]]] = KEYWORD_RULES,
    fallback: str = FALLBACK,
) -> str:
    message = text.lower()
    for category, keywords in rules:
        if any(keyword in message for keyword in keywords):
            return category
    return fallback


def respond(
    text: str,
    responses: Mapping[str, Sequence[str]] = RESPONSES,
    rules: Sequence[Tuple[str, Sequence[str]]] = KEYWORD_RULES,
    rng: Optional[random.Random] = None,
) -> str:
    category = match_category(text, rules)
    candidates = responses.get(category) or responses[FALLBACK]
    return (rng or random).choice(candidates)
