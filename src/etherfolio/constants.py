"""Provider endpoints and the default tracked assets."""

from .domain import AssetDescriptor

ETHERSCAN_API_V2_URL = "https://api.etherscan.io/v2/api"
COINGECKO_API_URL = "https://api.coingecko.com/api/v3"

MAINNET_CHAIN_ID = 1
DEFAULT_FIAT_CURRENCY = "usd"

WEETH_ADDRESS = "0x35fA164735182de50811E8e2E824cFb9B6118ac2"
EETH_ADDRESS = "0xFe2e637202056d30016725477c5da089Ab0A043A"

ETH_MAINNET_TRACKED_ASSETS: tuple[AssetDescriptor, ...] = (
    AssetDescriptor(
        display_name="Ethereum",
        symbol="ETH",
        contract_address=None,
        price_id="ethereum",
        decimals=18,
    ),
    AssetDescriptor(
        display_name="weETH (Wrapped Ether.fi)",
        symbol="weETH",
        contract_address=WEETH_ADDRESS,
        price_id="ether-fi-staked-eth",
        decimals=18,
    ),
    AssetDescriptor(
        display_name="eETH (Ether.fi ETH)",
        symbol="eETH",
        contract_address=EETH_ADDRESS,
        price_id="ether-fi",
        decimals=18,
    ),
)
