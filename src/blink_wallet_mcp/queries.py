"""
Blink GraphQL documents.

One fixed query or mutation per supported wallet operation.
"""

ME_QUERY = """
  query Me {
    me {
      defaultAccount {
        defaultWalletId
        wallets {
          id
          walletCurrency
          balance
          pendingIncomingBalance
        }
      }
    }
  }
"""

TRANSACTIONS_QUERY = """
  query TransactionsByWalletId(
    $walletId: WalletId!
    $first: Int
    $after: String
  ) {
    me {
      defaultAccount {
        walletById(walletId: $walletId) {
          transactions(first: $first, after: $after) {
            pageInfo {
              hasNextPage
              hasPreviousPage
              startCursor
              endCursor
            }
            edges {
              node {
                id
                status
                direction
                memo
                createdAt
                settlementAmount
                settlementCurrency
                settlementDisplayAmount
                initiationVia {
                  ... on InitiationViaLn {
                    paymentHash
                  }
                  ... on InitiationViaOnChain {
                    address
                  }
                  ... on InitiationViaIntraLedger {
                    counterPartyUsername
                  }
                }
              }
            }
          }
        }
      }
    }
  }
"""

WEBHOOKS_QUERY = """
  query CallbackEndpoints {
    me {
      defaultAccount {
        callbackEndpoints {
          id
          url
        }
      }
    }
  }
"""

LN_INVOICE_CREATE_MUTATION = """
  mutation LnInvoiceCreate($input: LnInvoiceCreateInput!) {
    lnInvoiceCreate(input: $input) {
      invoice {
        paymentRequest
        paymentHash
        paymentSecret
        satoshis
      }
      errors {
        message
      }
    }
  }
"""

LN_INVOICE_PAYMENT_SEND_MUTATION = """
  mutation LnInvoicePaymentSend($input: LnInvoicePaymentInput!) {
    lnInvoicePaymentSend(input: $input) {
      status
      errors {
        message
      }
    }
  }
"""

LN_ADDRESS_PAYMENT_SEND_MUTATION = """
  mutation LnAddressPaymentSend($input: LnAddressPaymentSendInput!) {
    lnAddressPaymentSend(input: $input) {
      status
      errors {
        message
      }
    }
  }
"""

LNURL_PAYMENT_SEND_MUTATION = """
  mutation LnurlPaymentSend($input: LnurlPaymentSendInput!) {
    lnurlPaymentSend(input: $input) {
      status
      errors {
        message
      }
    }
  }
"""
