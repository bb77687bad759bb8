from datetime import date

from fx_ecb import EuCentralBank, Money

print(EuCentralBank.__version__)  # 0.1.0

# Default Usage
bank = EuCentralBank()

# Today's ECB reference rates
bank.update_exchange_rates()
print(bank.rates_updated_at, bank.last_updated)

# 100.00 USD in JPY at the latest feed date
print(bank.exchange(10000, "USD", "JPY", bank.rates_updated_at))

# Money in, Money out
print(bank.exchange_with(Money(cents=2500, currency="EUR"), "GBP", bank.rates_updated_at))

# Last 90 days of history
bank.update_exchange_rates("last_90_days")
print(bank.get_rate("EUR", "USD", date(2025, 11, 3)))

# Restrict ingestion to a few currencies and keep rates in YAML
bank = EuCentralBank(currencies=["USD", "GBP", "CHF"])
bank.update_exchange_rates()
payload = bank.export_rates("yaml")
print(payload.decode("utf-8"))

# Restore the same rates into a fresh bank
restored = EuCentralBank().import_rates("yaml", payload)
print(restored.rates())

# Keep a copy of the raw feed on disk
print(bank.save_rates("eurofxref-daily.xml"))
