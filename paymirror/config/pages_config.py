"""
Page Catalog Configuration
Defines the protectable dashboard pages, grouped the way the sidebar groups them.
Used by the seed script to populate rback_pages.
"""

PAGE_GROUPS = {
    "Authentication": [
        ("Login", "/auth/login"),
        ("Register", "/auth/register"),
    ],
    "Dashboard": [
        ("Dashboard Overview", "/dashboard"),
        ("Dashboard Analytics", "/analytics"),
    ],
    "Accounts": [
        ("Accounts List", "/accounts"),
        ("Account Details", "/accounts/[id]"),
        ("Account Settings", "/accounts/[id]/settings"),
        ("Create Account", "/accounts/create"),
    ],
    "Customers": [
        ("Customers List", "/customers"),
        ("Customer Details", "/customers/[id]"),
        ("Customer Payments", "/customers/[id]/payments"),
        ("Customer Subscriptions", "/customers/[id]/subscriptions"),
        ("Edit Customer", "/customers/[id]/edit"),
        ("Create Customer", "/customers/create"),
    ],
    "Payments": [
        ("Payments List", "/payments"),
        ("Payment Details", "/payments/[id]"),
        ("Refund Payment", "/payments/[id]/refund"),
        ("Create Payment", "/payments/create"),
        ("Payment Methods", "/payments/methods"),
        ("Payment Method Details", "/payments/methods/[id]"),
    ],
    "Subscriptions": [
        ("Subscriptions List", "/subscriptions"),
        ("Subscription Details", "/subscriptions/[id]"),
        ("Edit Subscription", "/subscriptions/[id]/edit"),
        ("Cancel Subscription", "/subscriptions/[id]/cancel"),
        ("Create Subscription", "/subscriptions/create"),
        ("Subscription Schedules", "/subscriptions/schedules"),
        ("Subscription Schedule Details", "/subscriptions/schedules/[id]"),
    ],
    "Products": [
        ("Products List", "/products"),
        ("Product Details", "/products/[id]"),
        ("Edit Product", "/products/[id]/edit"),
        ("Product Prices", "/products/[id]/prices"),
        ("Create Product Price", "/products/[id]/prices/create"),
        ("Create Product", "/products/create"),
    ],
    "Invoices": [
        ("Invoices List", "/invoices"),
        ("Invoice Details", "/invoices/[id]"),
        ("Edit Invoice", "/invoices/[id]/edit"),
        ("Send Invoice", "/invoices/[id]/send"),
        ("Create Invoice", "/invoices/create"),
        ("Invoice Items", "/invoices/items"),
        ("Create Invoice Item", "/invoices/items/create"),
    ],
    "Checkout": [
        ("Checkout Sessions", "/checkout/sessions"),
        ("Checkout Session Details", "/checkout/sessions/[id]"),
        ("Create Checkout Session", "/checkout/sessions/create"),
        ("Payment Links", "/checkout/payment-links"),
        ("Payment Link Details", "/checkout/payment-links/[id]"),
        ("Create Payment Link", "/checkout/payment-links/create"),
    ],
    "Promotions": [
        ("Coupons List", "/promotions/coupons"),
        ("Coupon Details", "/promotions/coupons/[id]"),
        ("Create Coupon", "/promotions/coupons/create"),
        ("Promotion Codes", "/promotions/codes"),
        ("Promotion Code Details", "/promotions/codes/[id]"),
        ("Create Promotion Code", "/promotions/codes/create"),
    ],
    "Finance": [
        ("Account Balance", "/finance/balance"),
        ("Balance Transactions", "/finance/balance/transactions"),
        ("Payouts List", "/finance/payouts"),
        ("Payout Details", "/finance/payouts/[id]"),
        ("Refunds List", "/finance/refunds"),
        ("Refund Details", "/finance/refunds/[id]"),
        ("Disputes List", "/finance/disputes"),
        ("Dispute Details", "/finance/disputes/[id]"),
    ],
    "Tax": [
        ("Tax Settings", "/tax/settings"),
        ("Tax Rates", "/tax/rates"),
        ("Tax Rate Details", "/tax/rates/[id]"),
        ("Create Tax Rate", "/tax/rates/create"),
        ("Tax Codes", "/tax/codes"),
        ("Tax Code Details", "/tax/codes/[id]"),
    ],
    "Shipping": [
        ("Shipping Rates", "/shipping/rates"),
        ("Shipping Rate Details", "/shipping/rates/[id]"),
        ("Create Shipping Rate", "/shipping/rates/create"),
    ],
    "Events": [
        ("Events List", "/events"),
        ("Event Details", "/events/[id]"),
        ("Webhook Endpoints", "/events/webhooks"),
        ("Webhook Details", "/events/webhooks/[id]"),
        ("Create Webhook", "/events/webhooks/create"),
    ],
    "Files": [
        ("Files List", "/files"),
        ("File Details", "/files/[id]"),
        ("Upload File", "/files/upload"),
        ("File Links", "/files/links"),
        ("Create File Link", "/files/links/create"),
    ],
    "Settings": [
        ("Settings Overview", "/settings"),
        ("User Profile", "/settings/profile"),
        ("Security Settings", "/settings/security"),
        ("Notification Settings", "/settings/notifications"),
        ("API Keys", "/settings/api-keys"),
    ],
    "Reports": [
        ("Revenue Reports", "/reports/revenue"),
        ("Customer Reports", "/reports/customers"),
        ("Payment Reports", "/reports/payments"),
        ("Subscription Reports", "/reports/subscriptions"),
    ],
}


def get_page_catalog():
    """
    Flattens PAGE_GROUPS into insertable rows.
    Format: [{"pagename": "Login", "pageurl": "/auth/login", "group_name": "Authentication"}, ...]
    """
    catalog = []
    for group_name, pages in PAGE_GROUPS.items():
        for pagename, pageurl in pages:
            catalog.append({
                "pagename": pagename,
                "pageurl": pageurl,
                "group_name": group_name
            })
    return catalog


PAGE_CATALOG = get_page_catalog()
