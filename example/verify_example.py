from eth_sigverify import check_message, check_typed_data, verify_message, verify_typed_data

address = "0x663918f51479a1dd832929199296843d09d0f71a"
message = "Hello from fresh test"
signature = "0xda689ba088beb48ceafea291888c4ad87f6cb3d9b2e45a4e8bf742b56ff8fa2f3f5fa686956810fe30171761489282af3a6e8047fd74591f81f822477be21e771b"

# EIP-712 "Ether Mail" example, signed by Cow
typed_address = "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"
typed_signature = "0x4355c47d63924e8a72e509b65029052eb6c299d53a04e167c5775fd466751c9d07299936d304c153f6443dfa05f40ff007d72911b6f72307f996231605b915621c"

domain = {
    "name": "Ether Mail",
    "version": "1",
    "chainId": 1,
    "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
}
types = {
    "Person": [
        {"name": "name", "type": "string"},
        {"name": "wallet", "type": "address"},
    ],
    "Mail": [
        {"name": "from", "type": "Person"},
        {"name": "to", "type": "Person"},
        {"name": "contents", "type": "string"},
    ],
}
value = {
    "from": {"name": "Cow", "wallet": typed_address},
    "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
    "contents": "Hello, Bob!",
}


def main():
    print("personal_sign valid:", verify_message(address, message, signature))

    result = check_message(address, message, signature)
    print("Recovered:", result.recovered_address, result.status.value)

    print("eip712 valid:", verify_typed_data(typed_address, typed_signature, domain, types, value))

    typed = check_typed_data(typed_address, typed_signature, domain, types, value, primary_type="Mail")
    print("eip712:", typed.status.value, typed.digest)

    tampered = dict(value, contents="Hello, Alice!")
    rejected = check_typed_data(typed_address, typed_signature, domain, types, tampered)
    print("tampered:", rejected.status.value, rejected.recovered_address)


if __name__ == "__main__":
    main()
