# Well-known local development key (hardhat account #0); never funded on a real chain.
SIGNER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
VAULT = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
PLAYER = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
OTHER_PLAYER = "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc"
